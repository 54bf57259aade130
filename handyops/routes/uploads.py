"""
Serves job photos stored by LocalPhotoStorage
"""
import os

from flask import Blueprint, current_app, jsonify, send_from_directory
from werkzeug.utils import secure_filename

uploads_bp = Blueprint('uploads', __name__)


@uploads_bp.route('/<filename>', methods=['GET'])
def serve_upload(filename):
    """Serve a previously uploaded photo."""
    folder = current_app.config['UPLOAD_FOLDER']
    safe_name = secure_filename(filename)
    if not os.path.exists(os.path.join(folder, safe_name)):
        return jsonify({'error': 'File not found'}), 404

    return send_from_directory(folder, safe_name)
