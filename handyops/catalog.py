"""
Service catalog

Holds the service definitions estimates are built from. Jobs keep only a weak
``service_id``, so deleting a service never touches existing jobs.
"""
import logging
import math

from handyops.errors import NotFoundError, ValidationError
from handyops.pricing import PRICING_TYPES
from handyops.utils.helpers import local_now, safe_float
from handyops.utils.validators import require_fields

logger = logging.getLogger(__name__)

SERVICE_CATEGORIES = [
    'Plumbing',
    'Electrical',
    'Carpentry',
    'Painting',
    'HVAC',
    'Roofing',
    'Flooring',
    'Drywall',
    'Landscaping',
    'Appliance Repair',
    'General Repair',
]

_EDITABLE_FIELDS = (
    'name', 'category', 'description', 'pricing_type', 'hourly_rate', 'flat_rate',
    'estimated_duration_hours', 'is_active',
)


def _positive_rate(value, label):
    rate = safe_float(value, default=None)
    if rate is None or not math.isfinite(rate) or rate <= 0:
        raise ValidationError(f'{label} must be greater than 0')
    return rate


def normalize_service(data):
    """
    Validate service fields and return the record to store

    The rate that does not match ``pricing_type`` is cleared so exactly one
    rate is ever set.

    Raises:
        ValidationError: missing fields, unknown category or pricing type,
            non-positive rate, negative duration
    """
    missing = require_fields(data, ('name', 'category', 'description'))
    if missing:
        raise ValidationError('Name, category, and description are required', details={'missing': missing})

    if data['category'] not in SERVICE_CATEGORIES:
        raise ValidationError(f'Unknown category: {data["category"]}')

    pricing_type = data.get('pricing_type')
    if pricing_type not in PRICING_TYPES:
        raise ValidationError(f'Pricing type must be one of: {", ".join(PRICING_TYPES)}')

    duration = safe_float(data.get('estimated_duration_hours', 0), default=None)
    if duration is None or not math.isfinite(duration) or duration < 0:
        raise ValidationError('Estimated duration must be zero or more hours')

    record = {
        'name': str(data['name']).strip(),
        'category': data['category'],
        'description': str(data['description']).strip(),
        'pricing_type': pricing_type,
        'hourly_rate': None,
        'flat_rate': None,
        'estimated_duration_hours': duration,
        'is_active': bool(data.get('is_active', True)),
    }
    if pricing_type == 'hourly':
        record['hourly_rate'] = _positive_rate(data.get('hourly_rate'), 'Hourly rate')
    else:
        record['flat_rate'] = _positive_rate(data.get('flat_rate'), 'Flat rate')
    return record


class CatalogService:
    """Catalog operations over a service record store"""

    def __init__(self, store, clock=local_now):
        self.store = store
        self.clock = clock

    def list_services(self, category=None, active=None, query=None):
        services = self.store.list({'category': category, 'is_active': active})
        if query:
            services = self._search(services, query)
        return sorted(services, key=lambda s: (s.get('category') or '', s.get('name') or ''))

    def search_services(self, query):
        return self.list_services(query=query)

    @staticmethod
    def _search(services, query):
        needle = query.strip().lower()
        return [
            s for s in services
            if needle in (s.get('name') or '').lower()
            or needle in (s.get('description') or '').lower()
            or needle in (s.get('category') or '').lower()
        ]

    def services_by_category(self):
        """Active services grouped under every category, empty ones included"""
        grouped = {category: [] for category in SERVICE_CATEGORIES}
        for service in self.list_services(active=True):
            grouped.setdefault(service['category'], []).append(service)
        return grouped

    def get_service(self, service_id):
        service = self.store.get_by_id(service_id)
        if service is None:
            raise NotFoundError('Service not found')
        return service

    def create_service(self, data):
        record = normalize_service(data)
        now = self.clock()
        record.update(created_at=now, updated_at=now)

        service = self.store.create(record)
        logger.info('Created service %s (%s)', service['id'], service['name'])
        return service

    def update_service(self, service_id, data):
        current = self.get_service(service_id)
        merged = {field: current.get(field) for field in _EDITABLE_FIELDS}
        merged.update({key: value for key, value in data.items() if key in _EDITABLE_FIELDS})

        record = normalize_service(merged)
        record['updated_at'] = self.clock()
        service = self.store.update(service_id, record)
        if service is None:
            raise NotFoundError('Service not found')
        return service

    def delete_service(self, service_id):
        if not self.store.delete(service_id):
            raise NotFoundError('Service not found')
        logger.info('Deleted service %s', service_id)
