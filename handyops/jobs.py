"""
Job records and their status lifecycle

A job moves forward one step at a time:

    Scheduled -> In Progress -> Completed -> Paid

``completed_at`` and ``paid_at`` are stamped once, on entering Completed and
Paid; ``updated_at`` is stamped on every mutation. All changes, calendar moves
included, go through ``JobService.update_job``. Concurrent edits are last write
wins.
"""
import logging
import math

from handyops.errors import NotFoundError, ValidationError
from handyops.photos import MAX_PHOTO_BYTES, validate_photo
from handyops.utils.helpers import generate_unique_id, local_now, parse_datetime, safe_float
from handyops.utils.validators import is_blank

logger = logging.getLogger(__name__)

SCHEDULED = 'Scheduled'
IN_PROGRESS = 'In Progress'
COMPLETED = 'Completed'
PAID = 'Paid'

JOB_STATUSES = (SCHEDULED, IN_PROGRESS, COMPLETED, PAID)

# The one action offered for each status, and the status it leads to
STATUS_ACTIONS = {
    SCHEDULED: ('Start Job', IN_PROGRESS),
    IN_PROGRESS: ('Mark Complete', COMPLETED),
    COMPLETED: ('Record Payment', PAID),
}

PRIORITIES = ('Low', 'Medium', 'High')

# Fields callers may set directly. Lifecycle stamps, notes and photos are
# owned by this module; the services manifest is fixed when the job is created.
_EDITABLE_FIELDS = (
    'client_name', 'phone', 'address', 'service_type', 'service_id', 'client_id', 'title',
    'description', 'priority', 'scheduled_date', 'price', 'estimated_cost',
    'estimated_duration', 'status',
)
_CREATE_FIELDS = _EDITABLE_FIELDS + ('services',)


def next_status(status):
    """Status that follows ``status``, or None once a job is paid"""
    action = STATUS_ACTIONS.get(status)
    return action[1] if action else None


def available_actions(status):
    """Actions offered for a job in ``status``"""
    action = STATUS_ACTIONS.get(status)
    if not action:
        return []
    label, target = action
    return [{'label': label, 'status': target}]


def _check_price(value, field='price'):
    if value is None or value == '':
        return None
    price = safe_float(value, default=None)
    if price is None or not math.isfinite(price) or price < 0:
        raise ValidationError(f'{field.replace("_", " ").capitalize()} must be a number of zero or more')
    return price


def _note_text(text):
    if text is not None and not isinstance(text, str):
        raise ValidationError('Note must be text')
    if is_blank(text):
        raise ValidationError('Please enter a note')
    return text.strip()


class JobService:
    """Job operations over a job record store"""

    def __init__(self, store, clock=local_now, default_hour=9, max_photo_bytes=MAX_PHOTO_BYTES):
        self.store = store
        self.clock = clock
        self.default_hour = default_hour
        self.max_photo_bytes = max_photo_bytes

    # -- queries ----------------------------------------------------------

    def list_jobs(self, status=None, search=None):
        """
        Jobs ordered by scheduled date

        Args:
            status (str): Only jobs in this status
            search (str): Case-insensitive match on client name, service type,
                address or phone
        """
        if status is not None and status not in JOB_STATUSES:
            raise ValidationError(f'Invalid status. Must be one of: {", ".join(JOB_STATUSES)}')

        jobs = self.store.list({'status': status})
        if search and search.strip():
            needle = search.strip().lower()
            jobs = [
                job for job in jobs
                if needle in (job.get('client_name') or '').lower()
                or needle in (job.get('service_type') or '').lower()
                or needle in (job.get('address') or '').lower()
                or needle in (job.get('phone') or '')
            ]
        return sorted(jobs, key=lambda job: job['scheduled_date'])

    def get_job(self, job_id):
        job = self.store.get_by_id(job_id)
        if job is None:
            raise NotFoundError('Job not found')
        return job

    # -- create / update / delete -----------------------------------------

    def _clean_changes(self, data, allowed=_EDITABLE_FIELDS):
        changes = {key: value for key, value in data.items() if key in allowed}

        if 'scheduled_date' in changes:
            scheduled = parse_datetime(changes['scheduled_date'], default_hour=self.default_hour)
            if scheduled is None:
                raise ValidationError('Scheduled date must be an ISO-8601 date or date-time')
            changes['scheduled_date'] = scheduled
        for field in ('price', 'estimated_cost', 'estimated_duration'):
            if field in changes:
                changes[field] = _check_price(changes[field], field)
        if 'priority' in changes and changes['priority'] not in PRIORITIES:
            raise ValidationError(f'Priority must be one of: {", ".join(PRIORITIES)}')
        return changes

    def create_job(self, data):
        changes = self._clean_changes(data, _CREATE_FIELDS)
        status = changes.pop('status', None) or SCHEDULED
        if status not in JOB_STATUSES:
            raise ValidationError(f'Invalid status. Must be one of: {", ".join(JOB_STATUSES)}')
        if 'scheduled_date' not in changes:
            raise ValidationError('Scheduled date is required')

        now = self.clock()
        record = {
            'client_name': '',
            'service_type': '',
            'priority': 'Medium',
            'price': None,
            'services': [],
            'notes': [],
            'photos': [],
        }
        record.update(changes)
        record.update(
            status=status,
            completed_at=now if status in (COMPLETED, PAID) else None,
            paid_at=now if status == PAID else None,
            created_at=now,
            updated_at=now,
        )

        job = self.store.create(record)
        logger.info('Created job %s for %s', job['id'], job.get('client_name') or 'unnamed client')
        return job

    def _status_stamps(self, job, new_status, now):
        current = job.get('status')
        if new_status not in JOB_STATUSES:
            raise ValidationError(f'Invalid status. Must be one of: {", ".join(JOB_STATUSES)}')
        if new_status == current:
            return {}
        if next_status(current) != new_status:
            raise ValidationError(f'Cannot move job from {current} to {new_status}')

        stamps = {'status': new_status}
        if new_status == COMPLETED and not job.get('completed_at'):
            stamps['completed_at'] = now
        if new_status == PAID and not job.get('paid_at'):
            stamps['paid_at'] = now
        return stamps

    def update_job(self, job_id, data):
        """
        Apply a partial update to a job

        A status change must be the single forward step from the current
        status.
        """
        changes = self._clean_changes(data)
        job = self.get_job(job_id)
        now = self.clock()

        if 'status' in changes:
            changes.update(self._status_stamps(job, changes.pop('status'), now))
        return self._save(job_id, changes, now)

    def _save(self, job_id, changes, now=None):
        changes['updated_at'] = now or self.clock()
        updated = self.store.update(job_id, changes)
        if updated is None:
            raise NotFoundError('Job not found')
        return updated

    def change_status(self, job_id, new_status):
        job = self.update_job(job_id, {'status': new_status})
        logger.info('Job %s is now %s', job_id, job['status'])
        return job

    def advance_status(self, job_id):
        """Move a job to the next status in its lifecycle"""
        job = self.get_job(job_id)
        target = next_status(job['status'])
        if target is None:
            raise ValidationError(f'Job is already {job["status"]}')
        return self.change_status(job_id, target)

    def delete_job(self, job_id):
        if not self.store.delete(job_id):
            raise NotFoundError('Job not found')
        logger.info('Deleted job %s', job_id)

    # -- notes ------------------------------------------------------------

    def add_note(self, job_id, text):
        text = _note_text(text)

        job = self.get_job(job_id)
        note = {
            'id': generate_unique_id(),
            'text': text,
            'created_at': self.clock().isoformat(),
        }
        self._save(job_id, {'notes': list(job.get('notes') or []) + [note]})
        return note

    def update_note(self, job_id, note_id, text):
        text = _note_text(text)

        job = self.get_job(job_id)
        notes = [dict(note) for note in job.get('notes') or []]
        for note in notes:
            if note['id'] == note_id:
                note['text'] = text
                note['updated_at'] = self.clock().isoformat()
                self._save(job_id, {'notes': notes})
                return note
        raise NotFoundError('Note not found')

    def delete_note(self, job_id, note_id):
        job = self.get_job(job_id)
        notes = job.get('notes') or []
        remaining = [note for note in notes if note['id'] != note_id]
        if len(remaining) == len(notes):
            raise NotFoundError('Note not found')
        self._save(job_id, {'notes': remaining})

    # -- photos -----------------------------------------------------------

    def add_photo(self, job_id, name, content_type, size, url):
        """
        Attach photo metadata to a job

        The bytes are stored by the caller; this records where they live.
        """
        validate_photo(content_type, size, self.max_photo_bytes)
        if not url:
            raise ValidationError('Photo URL is required')

        job = self.get_job(job_id)
        photo = {
            'id': generate_unique_id(),
            'name': name or 'photo',
            'url': url,
            'size': size,
            'type': content_type,
            'created_at': self.clock().isoformat(),
        }
        self._save(job_id, {'photos': list(job.get('photos') or []) + [photo]})
        return photo

    def delete_photo(self, job_id, photo_id):
        """Remove a photo from a job and return its metadata"""
        job = self.get_job(job_id)
        photos = job.get('photos') or []
        removed = [photo for photo in photos if photo['id'] == photo_id]
        if not removed:
            raise NotFoundError('Photo not found')
        self._save(job_id, {'photos': [photo for photo in photos if photo['id'] != photo_id]})
        return removed[0]
