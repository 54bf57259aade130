"""
Clients and their communication history
"""
import logging
import math

from handyops.errors import NotFoundError, ValidationError
from handyops.utils.helpers import local_now, parse_datetime, round_half_up, safe_float, safe_int
from handyops.utils.validators import is_blank, validate_email

logger = logging.getLogger(__name__)

CLIENT_STATUSES = ('Active', 'Inactive', 'Lead')
CONTACT_METHODS = ('email', 'phone', 'text')
COMMUNICATION_TYPES = ('email', 'phone', 'meeting', 'text', 'note')
DIRECTIONS = ('inbound', 'outbound')

_EDITABLE_FIELDS = (
    'name', 'company', 'email', 'phone', 'address', 'preferred_contact', 'notes', 'status',
    'total_jobs', 'total_spent',
)


def _clean_client(data):
    changes = {key: value for key, value in data.items() if key in _EDITABLE_FIELDS}

    if 'name' in changes:
        if is_blank(changes['name']):
            raise ValidationError('Client name is required')
        changes['name'] = str(changes['name']).strip()
    if changes.get('email') and not validate_email(changes['email']):
        raise ValidationError('Invalid email address')
    if 'status' in changes and changes['status'] not in CLIENT_STATUSES:
        raise ValidationError(f'Status must be one of: {", ".join(CLIENT_STATUSES)}')
    if changes.get('preferred_contact') and changes['preferred_contact'] not in CONTACT_METHODS:
        raise ValidationError(f'Preferred contact must be one of: {", ".join(CONTACT_METHODS)}')

    # Counters are maintained by whoever records the work; they only need to be sane
    if 'total_jobs' in changes:
        total_jobs = safe_int(changes['total_jobs'], default=-1)
        if total_jobs < 0:
            raise ValidationError('Total jobs must be zero or more')
        changes['total_jobs'] = total_jobs
    if 'total_spent' in changes:
        total_spent = safe_float(changes['total_spent'], default=-1)
        if not math.isfinite(total_spent) or total_spent < 0:
            raise ValidationError('Total spent must be zero or more')
        changes['total_spent'] = total_spent
    return changes


class ClientService:
    """Client and communication operations over their record stores"""

    def __init__(self, clients, communications, clock=local_now):
        self.clients = clients
        self.communications = communications
        self.clock = clock

    def list_clients(self, query=None, status=None):
        """
        Clients ordered by name

        Args:
            query (str): Case-insensitive match on name, email or company; phone
                digits match as typed
            status (str): Active, Inactive or Lead; ``All`` means no filter
        """
        if status == 'All':
            status = None
        if status is not None and status not in CLIENT_STATUSES:
            raise ValidationError(f'Status must be one of: {", ".join(CLIENT_STATUSES)}')

        clients = self.clients.list({'status': status})
        if query and query.strip():
            needle = query.strip().lower()
            clients = [
                client for client in clients
                if needle in (client.get('name') or '').lower()
                or needle in (client.get('email') or '').lower()
                or needle in (client.get('company') or '').lower()
                or needle in (client.get('phone') or '')
            ]
        return sorted(clients, key=lambda client: (client.get('name') or '').lower())

    def get_client(self, client_id):
        client = self.clients.get_by_id(client_id)
        if client is None:
            raise NotFoundError('Client not found')
        return client

    def create_client(self, data):
        changes = _clean_client(data)
        if 'name' not in changes:
            raise ValidationError('Client name is required')

        now = self.clock()
        record = {'preferred_contact': 'email'}
        record.update(changes)
        record.update(
            status=changes.get('status') or 'Active',
            total_jobs=0,
            total_spent=0.0,
            client_since=now,
            last_contact=now,
            created_at=now,
            updated_at=now,
        )

        client = self.clients.create(record)
        logger.info('Created client %s (%s)', client['id'], client['name'])
        return client

    def update_client(self, client_id, data):
        changes = _clean_client(data)
        changes['updated_at'] = self.clock()
        client = self.clients.update(client_id, changes)
        if client is None:
            raise NotFoundError('Client not found')
        return client

    def delete_client(self, client_id):
        """Delete a client together with its communications"""
        if self.clients.get_by_id(client_id) is None:
            raise NotFoundError('Client not found')

        removed = 0
        for communication in self.communications.list({'client_id': client_id}):
            if self.communications.delete(communication['id']):
                removed += 1
        self.clients.delete(client_id)
        logger.info('Deleted client %s and %d communication(s)', client_id, removed)

    # -- communications ---------------------------------------------------

    def list_communications(self, client_id):
        """Communications with a client, newest first"""
        self.get_client(client_id)
        communications = self.communications.list({'client_id': client_id})
        return sorted(communications, key=lambda item: item['date'], reverse=True)

    def log_communication(self, client_id, data):
        """Record a contact with a client and bump its ``last_contact``"""
        self.get_client(client_id)

        comm_type = data.get('type') or 'email'
        if comm_type not in COMMUNICATION_TYPES:
            raise ValidationError(f'Type must be one of: {", ".join(COMMUNICATION_TYPES)}')
        direction = data.get('direction') or 'outbound'
        if direction not in DIRECTIONS:
            raise ValidationError(f'Direction must be one of: {", ".join(DIRECTIONS)}')
        for field in ('subject', 'message'):
            if data.get(field) is not None and not isinstance(data[field], str):
                raise ValidationError(f'{field.capitalize()} must be text')
        if is_blank(data.get('subject')) and is_blank(data.get('message')):
            raise ValidationError('Please enter a subject or message')

        now = self.clock()
        date = now
        if data.get('date'):
            date = parse_datetime(data['date'])
            if date is None:
                raise ValidationError('Date must be an ISO-8601 date or date-time')

        communication = self.communications.create({
            'client_id': client_id,
            'type': comm_type,
            'subject': (data.get('subject') or '').strip(),
            'message': (data.get('message') or '').strip(),
            'direction': direction,
            'contact_person': data.get('contact_person'),
            'date': date,
            'created_at': now,
            'updated_at': now,
        })
        self.clients.update(client_id, {'last_contact': date, 'updated_at': now})
        return communication

    # -- statistics -------------------------------------------------------

    def client_stats(self):
        clients = self.clients.list()
        total = len(clients)
        total_jobs = sum(client.get('total_jobs') or 0 for client in clients)
        return {
            'total_clients': total,
            'active_clients': len([client for client in clients if client.get('status') == 'Active']),
            'total_revenue': sum(float(client.get('total_spent') or 0) for client in clients),
            'avg_jobs_per_client': round_half_up(total_jobs / total, 1) if total else 0,
        }
