"""
Pricing calculator.

Prices each eligible plan for the current selection: one breakdown line per
bracket with a positive count (bracket order), unit price x count, and the
total as the running sum of the subtotals. A bracket the plan does not price
contributes 0.
"""

from typing import Iterable, List

from quote_engine import BreakdownLine, PlanRecord, PricedOffer, SelectionState


def price_plan(plan: PlanRecord, selection: SelectionState) -> PricedOffer:
    """Price a single plan for the selection."""
    total = 0.0
    details = []

    for bracket, count in selection.active_brackets():
        unit_price = plan.price_for(bracket)
        subtotal = unit_price * count
        total += subtotal
        details.append(BreakdownLine(
            bracket=bracket,
            count=count,
            unit_price=unit_price,
            subtotal=subtotal,
        ))

    return PricedOffer(plan=plan, total_price=total, breakdown=tuple(details))


def price_plans(plans: Iterable[PlanRecord], selection: SelectionState) -> List[PricedOffer]:
    """
    Price every plan for the selection, preserving plan order.

    An empty selection produces no offers at all.
    """
    if selection.total_lives == 0:
        return []
    return [price_plan(plan, selection) for plan in plans]
