"""
Job photo validation and local file storage
"""
import logging
import os

from werkzeug.utils import secure_filename

from handyops.errors import ValidationError
from handyops.utils.helpers import generate_unique_id

logger = logging.getLogger(__name__)

MAX_PHOTO_BYTES = 5 * 1024 * 1024  # 5 MiB


def validate_photo(content_type, size, max_bytes=MAX_PHOTO_BYTES):
    """
    Check a photo before anything is stored

    Raises:
        ValidationError: not an image, or larger than ``max_bytes``
    """
    if not content_type or not str(content_type).startswith('image/'):
        raise ValidationError('Please select an image file')
    if size is None or size < 0:
        raise ValidationError('Photo size is required')
    if size > max_bytes:
        raise ValidationError(f'Image must be less than {max_bytes // (1024 * 1024)}MB')


class LocalPhotoStorage:
    """
    Writes uploaded photo bytes to a folder and hands back a URL for them
    """

    def __init__(self, folder, url_prefix='/api/uploads'):
        self.folder = folder
        self.url_prefix = url_prefix.rstrip('/')

    def _ensure_folder(self):
        if not os.path.exists(self.folder):
            os.makedirs(self.folder, exist_ok=True)

    def save(self, filename, content):
        """
        Store ``content`` under a unique name derived from ``filename``

        Returns:
            str: URL the photo can be fetched from
        """
        self._ensure_folder()
        safe_name = secure_filename(filename or '') or 'photo'
        stored_name = f'{generate_unique_id()}_{safe_name}'
        with open(os.path.join(self.folder, stored_name), 'wb') as fh:
            fh.write(content)

        logger.info('Stored photo %s (%d bytes)', stored_name, len(content))
        return f'{self.url_prefix}/{stored_name}'

    def delete(self, url):
        """Remove the file behind ``url`` if this storage owns it"""
        if not url or not url.startswith(self.url_prefix + '/'):
            return False

        stored_name = secure_filename(url.rsplit('/', 1)[-1])
        path = os.path.join(self.folder, stored_name)
        if not os.path.exists(path):
            return False
        os.remove(path)
        return True
