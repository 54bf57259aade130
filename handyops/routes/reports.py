"""
Dashboard and report API routes
"""
from flask import Blueprint, request

from handyops.reports import dashboard_metrics, report_summary
from handyops.utils.helpers import safe_int
from .common import job_service, respond

reports_bp = Blueprint('reports', __name__)


@reports_bp.route('/dashboard', methods=['GET'])
def dashboard():
    """Headline metrics and today's first jobs"""
    return respond({'metrics': dashboard_metrics(job_service().list_jobs())})


@reports_bp.route('/reports', methods=['GET'])
def reports():
    """
    Revenue report over a trailing window
    GET /api/reports?months=6   (3, 6 or 12)
    """
    months = safe_int(request.args.get('months'), default=6)
    return respond({'report': report_summary(job_service().list_jobs(), months=months)})
