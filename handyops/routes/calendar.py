"""
Calendar API routes
"""
from flask import Blueprint, current_app, request

from handyops.errors import BackendUnavailableError, ValidationError
from handyops.scheduling import MONTH, CalendarView, ScheduleBoard, month_grid, time_grid
from handyops.utils.helpers import local_now, parse_date
from .common import job_service, json_body, respond

calendar_bp = Blueprint('calendar', __name__)


def _day_cell(cell):
    return dict(cell._asdict())


def _day_column(column):
    data = column._asdict()
    data['slots'] = [slot._asdict() for slot in column.slots]
    return data


@calendar_bp.route('', methods=['GET'])
def get_calendar():
    """
    Jobs laid out for one calendar period
    GET /api/calendar?view=month|week|day&date=2024-03-15
    """
    config = current_app.config
    raw_date = request.args.get('date')
    current = parse_date(raw_date) if raw_date else local_now().date()
    if current is None:
        raise ValidationError('date must be YYYY-MM-DD')

    view = CalendarView(current, request.args.get('view') or MONTH)
    jobs = job_service().list_jobs()

    payload = {
        'view': view.view_mode,
        'date': view.current_date,
        'title': view.title(),
        'previous_date': view.previous().current_date,
        'next_date': view.next().current_date,
    }
    if view.view_mode == MONTH:
        weeks = month_grid(view, jobs, cell_limit=config['MONTH_CELL_LIMIT'])
        payload['weeks'] = [[_day_cell(cell) for cell in week] for week in weeks]
    else:
        columns = time_grid(view, jobs, start_hour=config['CALENDAR_START_HOUR'],
                            end_hour=config['CALENDAR_END_HOUR'])
        payload['days'] = [_day_column(column) for column in columns]
    return respond(payload)


@calendar_bp.route('/jobs/<job_id>/move', methods=['POST'])
def move_job(job_id):
    """
    Drop a job on a day cell or an hourly slot
    POST /api/calendar/jobs/:id/move
    Body: {"date": "2024-03-18", "hour": 14}   (omit hour for a day-cell drop)

    When the update fails the response carries the job as it was before the drop.
    """
    data = json_body()
    service = job_service()
    board = ScheduleBoard(service, [service.get_job(job_id)],
                          default_hour=current_app.config['DEFAULT_DROP_HOUR'])

    try:
        job = board.move_job(job_id, data.get('date'), data.get('hour'))
    except BackendUnavailableError as err:
        payload = err.to_dict()
        payload['job'] = board.get(job_id)
        return respond(payload, err.status_code)
    return respond({'job': job})
