"""
Service catalog API routes
"""
from flask import Blueprint, request

from handyops.catalog import SERVICE_CATEGORIES
from .common import catalog_service, json_body, query_flag, respond

services_bp = Blueprint('services', __name__)


@services_bp.route('', methods=['GET'])
def list_services():
    """
    List catalog services
    GET /api/services?category=Plumbing&active=true&q=faucet
    """
    services = catalog_service().list_services(
        category=request.args.get('category') or None,
        active=query_flag('active'),
        query=request.args.get('q'),
    )
    return respond({'services': services, 'total': len(services)})


@services_bp.route('/categories', methods=['GET'])
def list_categories():
    return respond({'categories': SERVICE_CATEGORIES})


@services_bp.route('/by-category', methods=['GET'])
def services_by_category():
    """Active services grouped by category"""
    return respond({'categories': catalog_service().services_by_category()})


@services_bp.route('/<service_id>', methods=['GET'])
def get_service(service_id):
    return respond({'service': catalog_service().get_service(service_id)})


@services_bp.route('', methods=['POST'])
def create_service():
    """
    Create a service
    POST /api/services
    Body: {
        "name": "Drywall Installation",
        "category": "Drywall",
        "description": "...",
        "pricing_type": "hourly",
        "hourly_rate": 45,
        "estimated_duration_hours": 2
    }
    """
    service = catalog_service().create_service(json_body())
    return respond({'service': service}, 201)


@services_bp.route('/<service_id>', methods=['PUT', 'PATCH'])
def update_service(service_id):
    service = catalog_service().update_service(service_id, json_body())
    return respond({'service': service})


@services_bp.route('/<service_id>', methods=['DELETE'])
def delete_service(service_id):
    catalog_service().delete_service(service_id)
    return respond({'deleted': True})
