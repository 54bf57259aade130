"""
Pricing engine tests
Tests per-service rates, estimate totals and the overhead markup
"""
import pytest

from handyops.errors import InvalidServiceError
from handyops.pricing import LineItem, aggregate_estimate, base_rate, suggested_total

DRYWALL = {
    'id': 'svc-drywall',
    'name': 'Drywall Installation',
    'pricing_type': 'hourly',
    'hourly_rate': 45,
    'estimated_duration_hours': 2,
}
FAUCET = {
    'id': 'svc-faucet',
    'name': 'Faucet Replacement',
    'pricing_type': 'flat',
    'flat_rate': 150,
    'estimated_duration_hours': 1.5,
}


class TestBaseRate:
    """Test the cost of a quantity of one service"""

    def test_hourly_rate_times_duration_times_quantity(self):
        """Hourly services cost rate x hours x quantity"""
        assert base_rate(DRYWALL, 3) == pytest.approx(270)

    def test_flat_rate_times_quantity(self):
        assert base_rate(FAUCET, 2) == pytest.approx(300)

    @pytest.mark.parametrize('service', [DRYWALL, FAUCET])
    def test_linear_in_quantity(self, service):
        """Doubling the quantity doubles the cost"""
        assert base_rate(service, 4) == pytest.approx(2 * base_rate(service, 2))

    def test_unknown_pricing_type_is_rejected(self):
        with pytest.raises(InvalidServiceError):
            base_rate(dict(DRYWALL, pricing_type='daily'), 1)

    def test_missing_rate_is_rejected(self):
        with pytest.raises(InvalidServiceError):
            base_rate(dict(FAUCET, flat_rate=None), 1)


class TestAggregateEstimate:
    """Test estimate totals"""

    def test_empty_estimate_is_all_zero(self):
        totals = aggregate_estimate([])
        assert totals.labor_cost == 0
        assert totals.total_duration_hours == 0
        assert totals.suggested_total == 0

    def test_drywall_times_three(self):
        """Three drywall installs: $270 labor, 6 hours, $310.50 suggested"""
        totals = aggregate_estimate([LineItem(DRYWALL, 3)])
        assert totals.labor_cost == pytest.approx(270)
        assert totals.total_duration_hours == pytest.approx(6)
        assert totals.suggested_total == pytest.approx(310.50)

    def test_mixed_services(self):
        totals = aggregate_estimate([LineItem(DRYWALL, 1), LineItem(FAUCET, 2)])
        assert totals.labor_cost == pytest.approx(90 + 300)
        assert totals.total_duration_hours == pytest.approx(2 + 3)

    def test_suggested_total_adds_fifteen_percent(self):
        totals = aggregate_estimate([LineItem(FAUCET, 1)])
        assert totals.suggested_total == pytest.approx(totals.labor_cost * 1.15)
        assert suggested_total(100) == pytest.approx(115)

    def test_inputs_are_not_mutated(self):
        service = dict(DRYWALL)
        items = [LineItem(service, 2)]
        aggregate_estimate(items)
        assert service == DRYWALL
        assert items[0].quantity == 2
