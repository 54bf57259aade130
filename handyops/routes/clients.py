"""
Client and communication API routes
"""
from flask import Blueprint, request

from .common import client_service, json_body, respond, review_service

clients_bp = Blueprint('clients', __name__)


@clients_bp.route('', methods=['GET'])
def list_clients():
    """
    List clients
    GET /api/clients?q=acme&status=Active
    """
    clients = client_service().list_clients(
        query=request.args.get('q'),
        status=request.args.get('status') or None,
    )
    return respond({'clients': clients, 'total': len(clients)})


@clients_bp.route('/stats', methods=['GET'])
def client_stats():
    return respond({'stats': client_service().client_stats()})


@clients_bp.route('/<client_id>', methods=['GET'])
def get_client(client_id):
    client = client_service().get_client(client_id)
    client['average_rating'] = review_service().average_rating_for_client(client_id)
    return respond({'client': client})


@clients_bp.route('', methods=['POST'])
def create_client():
    client = client_service().create_client(json_body())
    return respond({'client': client}, 201)


@clients_bp.route('/<client_id>', methods=['PUT', 'PATCH'])
def update_client(client_id):
    client = client_service().update_client(client_id, json_body())
    return respond({'client': client})


@clients_bp.route('/<client_id>', methods=['DELETE'])
def delete_client(client_id):
    """Delete a client and its communication history"""
    client_service().delete_client(client_id)
    return respond({'deleted': True})


@clients_bp.route('/<client_id>/communications', methods=['GET'])
def list_communications(client_id):
    communications = client_service().list_communications(client_id)
    return respond({'communications': communications, 'total': len(communications)})


@clients_bp.route('/<client_id>/communications', methods=['POST'])
def log_communication(client_id):
    """
    Log a contact with a client
    POST /api/clients/:id/communications
    Body: {"type": "phone", "subject": "...", "message": "...", "direction": "inbound"}
    """
    communication = client_service().log_communication(client_id, json_body())
    return respond({'communication': communication}, 201)
