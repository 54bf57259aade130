"""
Job API routes: CRUD, status actions, notes and photos
"""
import logging

from flask import Blueprint, request

from handyops.errors import HandyOpsError, ValidationError
from handyops.jobs import available_actions
from handyops.photos import validate_photo
from handyops.utils.helpers import safe_int
from .common import job_service, json_body, photo_storage, respond

logger = logging.getLogger(__name__)

jobs_bp = Blueprint('jobs', __name__)


def _with_actions(job):
    return dict(job, actions=available_actions(job.get('status')))


@jobs_bp.route('', methods=['GET'])
def list_jobs():
    """
    List jobs ordered by scheduled date
    GET /api/jobs?status=Scheduled&q=smith
    """
    jobs = job_service().list_jobs(
        status=request.args.get('status') or None,
        search=request.args.get('q'),
    )
    return respond({'jobs': [_with_actions(job) for job in jobs], 'total': len(jobs)})


@jobs_bp.route('/<job_id>', methods=['GET'])
def get_job(job_id):
    return respond({'job': _with_actions(job_service().get_job(job_id))})


@jobs_bp.route('', methods=['POST'])
def create_job():
    """
    Create a job
    POST /api/jobs
    Body: {
        "client_name": "Jane Smith",
        "service_type": "Drywall",
        "scheduled_date": "2024-03-15T10:00:00",
        "price": 250
    }
    """
    job = job_service().create_job(json_body())
    return respond({'job': _with_actions(job)}, 201)


@jobs_bp.route('/<job_id>', methods=['PUT', 'PATCH'])
def update_job(job_id):
    job = job_service().update_job(job_id, json_body())
    return respond({'job': _with_actions(job)})


@jobs_bp.route('/<job_id>', methods=['DELETE'])
def delete_job(job_id):
    job_service().delete_job(job_id)
    return respond({'deleted': True})


# ---------------------------------------------------------------------------
# Status actions
# ---------------------------------------------------------------------------

@jobs_bp.route('/<job_id>/status', methods=['POST'])
def change_status(job_id):
    """
    Move a job to its next status
    POST /api/jobs/:id/status
    Body: {"status": "In Progress"}
    """
    status = json_body().get('status')
    if not status:
        raise ValidationError('status is required')
    job = job_service().change_status(job_id, status)
    return respond({'job': _with_actions(job)})


@jobs_bp.route('/<job_id>/advance', methods=['POST'])
def advance_status(job_id):
    job = job_service().advance_status(job_id)
    return respond({'job': _with_actions(job)})


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------

@jobs_bp.route('/<job_id>/notes', methods=['GET'])
def list_notes(job_id):
    return respond({'notes': job_service().get_job(job_id).get('notes') or []})


@jobs_bp.route('/<job_id>/notes', methods=['POST'])
def add_note(job_id):
    note = job_service().add_note(job_id, json_body().get('text'))
    return respond({'note': note}, 201)


@jobs_bp.route('/<job_id>/notes/<note_id>', methods=['PUT', 'PATCH'])
def update_note(job_id, note_id):
    note = job_service().update_note(job_id, note_id, json_body().get('text'))
    return respond({'note': note})


@jobs_bp.route('/<job_id>/notes/<note_id>', methods=['DELETE'])
def delete_note(job_id, note_id):
    job_service().delete_note(job_id, note_id)
    return respond({'deleted': True})


# ---------------------------------------------------------------------------
# Photos
# ---------------------------------------------------------------------------

@jobs_bp.route('/<job_id>/photos', methods=['GET'])
def list_photos(job_id):
    return respond({'photos': job_service().get_job(job_id).get('photos') or []})


@jobs_bp.route('/<job_id>/photos', methods=['POST'])
def add_photo(job_id):
    """
    Attach a photo to a job

    multipart/form-data with a ``photo`` file field stores the bytes locally;
    a JSON body ``{"name", "type", "size", "url"}`` records a photo that is
    already stored elsewhere.
    """
    service = job_service()

    if not request.files:
        data = json_body()
        photo = service.add_photo(job_id, data.get('name'), data.get('type'),
                                  safe_int(data.get('size'), default=None), data.get('url'))
        return respond({'photo': photo}, 201)

    upload = request.files.get('photo')
    if upload is None or not upload.filename:
        raise ValidationError("No photo provided. Use the 'photo' form field.")

    content = upload.read()
    validate_photo(upload.mimetype, len(content), service.max_photo_bytes)
    service.get_job(job_id)

    storage = photo_storage()
    url = storage.save(upload.filename, content)
    try:
        photo = service.add_photo(job_id, upload.filename, upload.mimetype, len(content), url)
    except HandyOpsError:
        storage.delete(url)
        raise
    return respond({'photo': photo}, 201)


@jobs_bp.route('/<job_id>/photos/<photo_id>', methods=['DELETE'])
def delete_photo(job_id, photo_id):
    photo = job_service().delete_photo(job_id, photo_id)
    if photo_storage().delete(photo.get('url')):
        logger.info('Removed stored file for photo %s', photo_id)
    return respond({'deleted': True})
