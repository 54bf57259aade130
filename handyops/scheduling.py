"""
Calendar placement and drag-and-drop rescheduling

Jobs are laid out on a month grid (six Sunday-first weeks), a week grid (seven
day columns of hourly slots) or a day grid (one column of hourly slots). A job
sits in the cell whose date, and for the hourly grids whose top-of-hour,
matches its ``scheduled_date``.

Moving a job is a two-phase local update: the board applies the new slot right
away, sends it through ``JobService.update_job`` and either keeps the confirmed
record or puts the job back where it was.
"""
import calendar
import logging
from collections import namedtuple
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta

from handyops.errors import HandyOpsError, NotFoundError, ValidationError
from handyops.utils.helpers import local_now, parse_date

logger = logging.getLogger(__name__)

MONTH = 'month'
WEEK = 'week'
DAY = 'day'
VIEW_MODES = (MONTH, WEEK, DAY)

CALENDAR_START_HOUR = 7
CALENDAR_END_HOUR = 18
DEFAULT_DROP_HOUR = 9
MONTH_CELL_LIMIT = 3

DayCell = namedtuple('DayCell', ['date', 'in_month', 'is_today', 'jobs', 'overflow'])
HourSlot = namedtuple('HourSlot', ['hour', 'label', 'jobs'])
DayColumn = namedtuple('DayColumn', ['date', 'is_today', 'slots', 'unslotted'])
PendingMove = namedtuple('PendingMove', ['job_id', 'previous_date', 'target_date'])


def _add_months(day, months):
    """Shift by whole months, clamping the day to the target month's length"""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def week_start(day):
    """Sunday on or before ``day``"""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _job_day(job):
    return job['scheduled_date'].date()


def _by_time(jobs):
    return sorted(jobs, key=lambda job: job['scheduled_date'])


def hour_label(hour):
    suffix = 'AM' if hour < 12 else 'PM'
    return f'{(hour % 12) or 12}:00 {suffix}'


@dataclass(frozen=True)
class CalendarView:
    """Which period the calendar shows; navigation returns a new view"""
    current_date: date
    view_mode: str = MONTH

    def __post_init__(self):
        if self.view_mode not in VIEW_MODES:
            raise ValidationError(f'View must be one of: {", ".join(VIEW_MODES)}')

    def _shift(self, step):
        if self.view_mode == MONTH:
            target = _add_months(self.current_date, step)
        elif self.view_mode == WEEK:
            target = self.current_date + timedelta(weeks=step)
        else:
            target = self.current_date + timedelta(days=step)
        return replace(self, current_date=target)

    def previous(self):
        return self._shift(-1)

    def next(self):
        return self._shift(1)

    def today(self, clock=local_now):
        return replace(self, current_date=clock().date())

    def visible_days(self):
        """Dates covered by the view, in display order"""
        if self.view_mode == MONTH:
            start = week_start(self.current_date.replace(day=1))
            return [start + timedelta(days=offset) for offset in range(42)]
        if self.view_mode == WEEK:
            start = week_start(self.current_date)
            return [start + timedelta(days=offset) for offset in range(7)]
        return [self.current_date]

    def title(self):
        if self.view_mode == MONTH:
            return self.current_date.strftime('%B %Y')
        if self.view_mode == WEEK:
            days = self.visible_days()
            return '{} - {}'.format(days[0].strftime('%b %d'), days[-1].strftime('%b %d, %Y'))
        return self.current_date.strftime('%A, %B %d, %Y')


def month_grid(view, jobs, today=None, cell_limit=MONTH_CELL_LIMIT):
    """
    Six weeks of day cells for the month containing ``view.current_date``

    Args:
        view (CalendarView): Month view
        jobs (list): Job records
        today (date): Highlighted date
        cell_limit (int): Jobs shown per cell before the "+N more" overflow

    Returns:
        list: Six lists of seven ``DayCell``
    """
    today = today or local_now().date()
    by_day = {}
    for job in jobs:
        by_day.setdefault(_job_day(job), []).append(job)

    cells = []
    for day in CalendarView(view.current_date, MONTH).visible_days():
        day_jobs = _by_time(by_day.get(day, []))
        cells.append(DayCell(
            date=day,
            in_month=day.month == view.current_date.month,
            is_today=day == today,
            jobs=day_jobs[:cell_limit],
            overflow=max(0, len(day_jobs) - cell_limit),
        ))
    return [cells[i:i + 7] for i in range(0, 42, 7)]


def time_grid(view, jobs, today=None, start_hour=CALENDAR_START_HOUR, end_hour=CALENDAR_END_HOUR):
    """
    Day columns of hourly slots for a week or day view

    Jobs scheduled outside ``start_hour``..``end_hour`` are listed in the
    column's ``unslotted`` jobs rather than dropped.
    """
    today = today or local_now().date()
    hours = range(start_hour, end_hour + 1)

    columns = []
    for day in view.visible_days():
        day_jobs = _by_time(job for job in jobs if _job_day(job) == day)
        slots = [
            HourSlot(hour=hour, label=hour_label(hour),
                     jobs=[job for job in day_jobs if job['scheduled_date'].hour == hour])
            for hour in hours
        ]
        unslotted = [job for job in day_jobs if job['scheduled_date'].hour not in hours]
        columns.append(DayColumn(date=day, is_today=day == today, slots=slots, unslotted=unslotted))
    return columns


def drop_target(target_date, hour=None, default_hour=DEFAULT_DROP_HOUR):
    """
    New ``scheduled_date`` for a drop

    A day-cell drop (no hour) lands at ``default_hour``; an hourly-slot drop
    lands on that hour. Minutes and seconds are always zero.
    """
    day = parse_date(target_date)
    if day is None:
        raise ValidationError('Target date must be a YYYY-MM-DD date')
    if hour is None:
        hour = default_hour
    if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour <= 23:
        raise ValidationError('Hour must be a whole number from 0 to 23')
    return datetime.combine(day, time(hour))


class ScheduleBoard:
    """
    The jobs loaded into a calendar and the one move in flight, if any

    The board owns its list of jobs; every successful move replaces the local
    copy with the record the store confirmed.
    """

    def __init__(self, job_service, jobs, default_hour=DEFAULT_DROP_HOUR):
        self.job_service = job_service
        self.jobs = list(jobs)
        self.default_hour = default_hour
        self.pending = None

    def _index(self, job_id):
        for index, job in enumerate(self.jobs):
            if job['id'] == job_id:
                return index
        raise NotFoundError('Job not found')

    def get(self, job_id):
        return self.jobs[self._index(job_id)]

    def move_job(self, job_id, target_date, hour=None):
        """
        Reschedule a job by dropping it on a day cell or an hourly slot

        Raises:
            ValidationError: bad target date or hour
            NotFoundError: job is not on the board
            HandyOpsError: the update failed; the job is back in its old slot
        """
        index = self._index(job_id)
        target = drop_target(target_date, hour, self.default_hour)
        original = self.jobs[index]

        # Phase one: show the job in its new slot
        self.pending = PendingMove(job_id, original['scheduled_date'], target)
        self.jobs[index] = dict(original, scheduled_date=target)

        # Phase two: confirm or revert
        try:
            confirmed = self.job_service.update_job(job_id, {'scheduled_date': target})
        except HandyOpsError:
            self.jobs[index] = original
            logger.warning('Move of job %s to %s failed; restored to %s',
                           job_id, target.isoformat(), original['scheduled_date'])
            raise
        finally:
            self.pending = None

        self.jobs[index] = confirmed
        logger.info('Moved job %s to %s', job_id, target.isoformat())
        return confirmed
