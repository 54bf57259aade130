"""
Helpers shared by the API blueprints
"""
from flask import current_app, jsonify, request

from handyops.catalog import CatalogService
from handyops.clients import ClientService
from handyops.errors import ValidationError
from handyops.jobs import JobService
from handyops.photos import LocalPhotoStorage
from handyops.reviews import ReviewService
from handyops.store import get_stores
from handyops.utils.helpers import serialize_record


def json_body():
    """Request JSON object; anything else is a validation error"""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def respond(payload, status=200):
    return jsonify(serialize_record(payload)), status


def query_flag(name):
    """``?name=true|false`` as a bool, or None when absent"""
    value = request.args.get(name)
    if value is None or value == '':
        return None
    return value.lower() in ('1', 'true', 'yes')


def job_service():
    config = current_app.config
    return JobService(
        get_stores().jobs,
        default_hour=config['DEFAULT_DROP_HOUR'],
        max_photo_bytes=config['MAX_PHOTO_BYTES'],
    )


def catalog_service():
    return CatalogService(get_stores().services)


def client_service():
    stores = get_stores()
    return ClientService(stores.clients, stores.communications)


def review_service():
    return ReviewService(get_stores().reviews)


def photo_storage():
    return LocalPhotoStorage(
        current_app.config['UPLOAD_FOLDER'],
        url_prefix=f"{current_app.config['API_PREFIX']}/uploads",
    )
