"""
Pricing engine

Pure functions: no I/O and no mutation of their inputs. Amounts are kept at
full float precision; rounding to cents happens only when a figure is shown
(see ``handyops.utils.helpers.round_currency``).
"""
from dataclasses import dataclass
from typing import Iterable

from handyops.errors import InvalidServiceError

OVERHEAD_MARKUP = 0.15

PRICING_TYPES = ('hourly', 'flat')


@dataclass(frozen=True)
class LineItem:
    """A catalog service and how many of it the estimate includes"""
    service: dict
    quantity: int = 1

    @property
    def service_id(self):
        return self.service.get('id')

    @property
    def line_total(self) -> float:
        return base_rate(self.service, self.quantity)

    @property
    def duration_hours(self) -> float:
        return float(self.service.get('estimated_duration_hours') or 0) * self.quantity


@dataclass(frozen=True)
class EstimateTotals:
    labor_cost: float = 0.0
    total_duration_hours: float = 0.0
    suggested_total: float = 0.0

    def to_dict(self):
        return {
            'labor_cost': self.labor_cost,
            'total_duration_hours': self.total_duration_hours,
            'suggested_total': self.suggested_total,
        }


def unit_rate(service: dict) -> float:
    """
    Price of one unit of a service

    Hourly services cost ``hourly_rate * estimated_duration_hours`` per unit,
    flat services cost ``flat_rate``.

    Raises:
        InvalidServiceError: unknown pricing type or missing rate
    """
    pricing_type = service.get('pricing_type')

    if pricing_type == 'hourly':
        rate = service.get('hourly_rate')
        if rate is None:
            raise InvalidServiceError(f'Service {service.get("name")!r} has no hourly rate')
        return float(rate) * float(service.get('estimated_duration_hours') or 0)

    if pricing_type == 'flat':
        rate = service.get('flat_rate')
        if rate is None:
            raise InvalidServiceError(f'Service {service.get("name")!r} has no flat rate')
        return float(rate)

    raise InvalidServiceError(f'Unknown pricing type: {pricing_type!r}')


def base_rate(service: dict, quantity: int = 1) -> float:
    """Cost of ``quantity`` units of ``service``; linear in quantity."""
    return unit_rate(service) * quantity


def catalog_rate(service: dict):
    """The rate shown for a service: hourly rate or flat rate, per its pricing type"""
    if service.get('pricing_type') == 'hourly':
        return service.get('hourly_rate')
    return service.get('flat_rate')


def suggested_total(labor_cost: float) -> float:
    return labor_cost * (1 + OVERHEAD_MARKUP)


def aggregate_estimate(line_items: Iterable[LineItem]) -> EstimateTotals:
    """
    Totals for an estimate

    An empty selection yields all zeros.
    """
    labor_cost = 0.0
    total_duration = 0.0
    for item in line_items:
        labor_cost += item.line_total
        total_duration += item.duration_hours

    return EstimateTotals(
        labor_cost=labor_cost,
        total_duration_hours=total_duration,
        suggested_total=suggested_total(labor_cost),
    )
