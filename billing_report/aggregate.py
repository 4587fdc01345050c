import math
from dataclasses import dataclass

from billing_report.cost_explorer import METRIC
from billing_report.errors import ParseError, ZeroTotalError

# Totals below half a cent are treated as zero
ZERO_TOTAL_TOLERANCE = 0.005


@dataclass
class CostEntry:
    """Cost of one service and its share of the month's total."""

    name: str
    cost: float
    ratio: float


def _groups(response):
    results = response.get("ResultsByTime") or []
    if not results:
        raise ParseError("Billing response contains no time period")
    return results[0].get("Groups", [])


def _parse_group(group):
    keys = group.get("Keys") or []
    name = keys[0] if keys else None
    if not name:
        raise ParseError(f"Billing group without a service key: {group!r}")

    amount = group.get("Metrics", {}).get(METRIC, {}).get("Amount")
    try:
        cost = float(amount)
    except (TypeError, ValueError):
        raise ParseError(f"Invalid {METRIC} amount for {name}: {amount!r}") from None
    if not math.isfinite(cost):
        raise ParseError(f"Invalid {METRIC} amount for {name}: {amount!r}")
    return name, cost


def sum_cost(response):
    """Add up the cost of every service in the first time period."""
    return sum(cost for _, cost in map(_parse_group, _groups(response)))


def make_cost_list(response, total_cost):
    """List each service with its share of total_cost, highest cost first."""
    if abs(total_cost) < ZERO_TOTAL_TOLERANCE:
        raise ZeroTotalError("Total cost is zero, cannot compute ratios")

    results = [
        CostEntry(name=name, cost=cost, ratio=cost / total_cost * 100)
        for name, cost in map(_parse_group, _groups(response))
    ]
    # sort() is stable, so equal costs keep the API order
    results.sort(key=lambda x: x.cost, reverse=True)
    return results


def aggregate(response):
    """Return (total_cost, ranked cost entries) for a Cost Explorer response."""
    total_cost = sum_cost(response)
    return total_cost, make_cost_list(response, total_cost)
