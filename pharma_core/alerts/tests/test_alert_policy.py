import pytest

from pharma_core.alerts.models import AlertType
from pharma_core.alerts.services import CRITICAL_STOCK_THRESHOLD, LOW_STOCK_THRESHOLD, alerts_for_stock_level


def test_thresholds_are_fixed():
    assert LOW_STOCK_THRESHOLD == 10
    assert CRITICAL_STOCK_THRESHOLD == 5


@pytest.mark.parametrize(
    "total,tier,expected",
    [
        (0, "LOW", [AlertType.STOCKOUT]),
        (0, "CRITICAL", [AlertType.STOCKOUT]),
        (4, "HIGH", [AlertType.LOW_STOCK, AlertType.CRITICAL]),
        (4, "CRITICAL", [AlertType.LOW_STOCK, AlertType.CRITICAL]),
        (4, "MEDIUM", [AlertType.LOW_STOCK]),
        (5, "CRITICAL", [AlertType.LOW_STOCK]),
        (9, "LOW", [AlertType.LOW_STOCK]),
        (10, "CRITICAL", []),
        (250, "HIGH", []),
    ],
)
def test_alerts_for_stock_level(total, tier, expected):
    assert alerts_for_stock_level(total, tier) == expected
