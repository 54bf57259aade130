"""
Estimate API routes

Estimates are computed per request from ``{"items": [{"service_id", "quantity"}]}``
and never stored; ``/convert`` is the only call that writes anything.
"""
from flask import Blueprint, current_app, make_response

from handyops.estimates import EstimateBuilder
from .common import catalog_service, job_service, json_body, respond

estimates_bp = Blueprint('estimates', __name__)


def _builder(data):
    return EstimateBuilder.from_selection(catalog_service(), data.get('items', []))


def _contact_line():
    config = current_app.config
    return ' | '.join(part for part in (config.get('BUSINESS_PHONE'), config.get('BUSINESS_EMAIL')) if part)


@estimates_bp.route('', methods=['POST'])
def calculate_estimate():
    """
    Price a selection of services
    POST /api/estimates
    Body: {"items": [{"service_id": "...", "quantity": 3}]}
    """
    return respond({'estimate': _builder(json_body()).to_dict()})


@estimates_bp.route('/convert', methods=['POST'])
def convert_estimate():
    """
    Turn an estimate into a Scheduled job with no price yet
    POST /api/estimates/convert
    Body: {"items": [...], "client_name": "...", "phone": "...", "address": "..."}
    """
    data = json_body()
    job = _builder(data).convert_to_job(
        job_service(),
        client_name=data.get('client_name', ''),
        phone=data.get('phone', ''),
        address=data.get('address', ''),
        client_id=data.get('client_id'),
    )
    return respond({'job': job}, 201)


@estimates_bp.route('/print', methods=['POST'])
def print_estimate():
    """Printable, self-contained HTML page for an estimate"""
    html = _builder(json_body()).render_printable(current_app.config['BUSINESS_NAME'],
                                                  contact_line=_contact_line())
    response = make_response(html, 200)
    response.headers['Content-Type'] = 'text/html; charset=utf-8'
    response.headers['Content-Security-Policy'] = "default-src 'none'; style-src 'unsafe-inline'"
    return response


@estimates_bp.route('/email', methods=['POST'])
def email_estimate():
    """
    Email draft for an estimate
    POST /api/estimates/email
    Body: {"items": [...], "recipient": "client@example.com"}
    """
    data = json_body()
    draft = _builder(data).render_email(current_app.config['BUSINESS_NAME'],
                                        recipient=data.get('recipient', ''))
    return respond({'email': draft._asdict()})
