"""
Estimate builder

In-memory selection of catalog services that prices itself through the
pricing engine and can become a Job, a printable page or an email. Estimates
are never persisted; only ``convert_to_job`` creates a record.
"""
import logging
import re
from contextlib import contextmanager

from handyops.errors import BuilderBusyError, EmptySelectionError, NotFoundError, ValidationError
from handyops.jobs import SCHEDULED
from handyops.pricing import LineItem, aggregate_estimate, catalog_rate, unit_rate
from handyops.utils.helpers import format_currency, format_hours, local_now, safe_int
from .render import render_estimate_email, render_estimate_html

logger = logging.getLogger(__name__)

EMPTY = 'empty'
HAS_SELECTION = 'has_selection'
CONVERTING = 'converting'
PRINTING = 'printing'
EMAILING = 'emailing'

_LEADING_INT = re.compile(r'\s*([+-]?\d+)')


def clamp_quantity(value):
    """Quantities are whole numbers of at least 1; anything else becomes 1"""
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        value = match.group(1) if match else None
    return max(1, safe_int(value, default=1))


class EstimateBuilder:
    """Ordered selection of services with quantities"""

    def __init__(self, clock=local_now):
        self.clock = clock
        self.line_items = []
        self._busy = None

    @classmethod
    def from_selection(cls, catalog, selection, clock=local_now):
        """
        Build an estimate from ``[{"service_id": ..., "quantity": ...}]``

        Raises:
            ValidationError: malformed selection or inactive service
            NotFoundError: unknown service id
        """
        if not isinstance(selection, list):
            raise ValidationError('items must be an array')

        builder = cls(clock=clock)
        for entry in selection:
            if not isinstance(entry, dict) or not entry.get('service_id'):
                raise ValidationError('Each item needs a service_id')
            service = catalog.get_service(entry['service_id'])
            if not service.get('is_active', True):
                raise ValidationError(f'Service {service["name"]!r} is not active')
            if builder.is_selected(service['id']):
                raise ValidationError(f'Service {service["name"]!r} is listed twice')
            builder.toggle_service(service)
            builder.set_quantity(service['id'], entry.get('quantity', 1))
        return builder

    # -- state ------------------------------------------------------------

    @property
    def state(self):
        if self._busy:
            return self._busy
        return HAS_SELECTION if self.line_items else EMPTY

    @contextmanager
    def _busy_as(self, state):
        if self._busy:
            raise BuilderBusyError(f'Estimate is busy ({self._busy})')
        if not self.line_items:
            raise EmptySelectionError()
        self._busy = state
        try:
            yield
        finally:
            self._busy = None

    def reset(self):
        self.line_items = []

    # -- selection --------------------------------------------------------

    def is_selected(self, service_id):
        return any(item.service_id == service_id for item in self.line_items)

    def toggle_service(self, service):
        """Add ``service`` with quantity 1, or remove it if already selected"""
        if self.is_selected(service['id']):
            self.line_items = [item for item in self.line_items if item.service_id != service['id']]
            return False

        # Validates the pricing fields up front
        unit_rate(service)
        self.line_items = self.line_items + [LineItem(service=dict(service), quantity=1)]
        return True

    def set_quantity(self, service_id, quantity):
        quantity = clamp_quantity(quantity)
        for index, item in enumerate(self.line_items):
            if item.service_id == service_id:
                items = list(self.line_items)
                items[index] = LineItem(service=item.service, quantity=quantity)
                self.line_items = items
                return quantity
        raise NotFoundError('Service is not part of this estimate')

    # -- totals -----------------------------------------------------------

    def totals(self):
        return aggregate_estimate(self.line_items)

    def to_dict(self):
        totals = self.totals()
        return {
            'state': self.state,
            'items': [
                {
                    'service_id': item.service_id,
                    'name': item.service.get('name'),
                    'pricing_type': item.service.get('pricing_type'),
                    'rate': catalog_rate(item.service),
                    'quantity': item.quantity,
                    'line_total': item.line_total,
                }
                for item in self.line_items
            ],
            'totals': totals.to_dict(),
        }

    def services_manifest(self):
        """Snapshot of the selection, frozen into the job at conversion time"""
        return [
            {
                'service_id': item.service_id,
                'service_name': item.service.get('name'),
                'quantity': item.quantity,
                'rate': catalog_rate(item.service),
                'pricing_type': item.service.get('pricing_type'),
                'estimated_duration': item.service.get('estimated_duration_hours'),
            }
            for item in self.line_items
        ]

    def _job_description(self, totals):
        lines = ['Quick estimate for selected services:']
        for item in self.line_items:
            service = item.service
            if service.get('pricing_type') == 'hourly':
                rate = '{}/hr x {}'.format(format_currency(service.get('hourly_rate')),
                                           format_hours(service.get('estimated_duration_hours')))
            else:
                rate = '{} flat rate'.format(format_currency(service.get('flat_rate')))
            lines.append('- {} - Qty: {} - {} = {}'.format(
                service.get('name'), item.quantity, rate, format_currency(item.line_total)))
        lines += ['', 'Estimated Total: {}'.format(format_currency(totals.labor_cost))]
        return '\n'.join(lines)

    # -- actions ----------------------------------------------------------

    def convert_to_job(self, job_service, client_name='', phone='', address='', client_id=None):
        """
        Persist the estimate as a Scheduled job with no committed price

        On success the builder is emptied. If the store fails the selection is
        kept and the error propagates.

        Raises:
            EmptySelectionError: nothing selected
            BuilderBusyError: another action is in flight
        """
        with self._busy_as(CONVERTING):
            totals = self.totals()
            names = [item.service.get('name') for item in self.line_items]
            job = job_service.create_job({
                'title': 'Estimate: ' + ', '.join(
                    '{} ({}x)'.format(item.service.get('name'), item.quantity) for item in self.line_items),
                'description': self._job_description(totals),
                'client_name': client_name or '',
                'phone': phone or '',
                'address': address or '',
                'client_id': client_id,
                'service_type': ', '.join(names),
                'service_id': self.line_items[0].service_id if len(self.line_items) == 1 else None,
                'scheduled_date': self.clock(),
                'price': None,
                'estimated_cost': totals.labor_cost,
                'estimated_duration': totals.total_duration_hours,
                'priority': 'Medium',
                'status': SCHEDULED,
                'services': self.services_manifest(),
            })

        logger.info('Converted estimate with %d service(s) into job %s', len(self.line_items), job['id'])
        self.reset()
        return job

    def render_printable(self, business_name, contact_line=''):
        with self._busy_as(PRINTING):
            return render_estimate_html(self.line_items, self.totals(), business_name,
                                        self.clock(), contact_line=contact_line)

    def render_email(self, business_name, recipient=''):
        with self._busy_as(EMAILING):
            return render_estimate_email(self.line_items, self.totals(), business_name,
                                         self.clock(), recipient=recipient)
