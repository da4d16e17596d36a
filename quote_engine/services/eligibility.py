"""
Eligibility filter.

Narrows the catalog to the plans that can be quoted for a category:
1. The plan must be sold under the chosen category.
2. Individual (PF) quotes made only of minors exclude the restricted operator,
   which does not underwrite unaccompanied minors.

Group categories never remove plans here; the adult-subscriber rule for
groups is a progression gate (see validation.py).
"""

import logging
from typing import Iterable, Optional, Tuple

from quote_engine import PlanRecord, QuoteCategory
from quote_engine.config import DEFAULT_RESTRICTED_OPERATOR
from quote_engine.utils.matching import contains_keyword

logger = logging.getLogger(__name__)


def is_restricted_operator(plan: PlanRecord, restricted_operator: str = DEFAULT_RESTRICTED_OPERATOR) -> bool:
    return contains_keyword(plan.operator, restricted_operator)


def excludes_restricted_operator(category: Optional[QuoteCategory], is_solo_minor: bool) -> bool:
    """Whether the solo-minor operator restriction applies to this quote."""
    return category is QuoteCategory.PF and is_solo_minor


def filter_eligible_plans(
    catalog: Iterable[PlanRecord],
    category: Optional[QuoteCategory],
    is_solo_minor: bool,
    restricted_operator: str = DEFAULT_RESTRICTED_OPERATOR,
) -> Tuple[PlanRecord, ...]:
    """
    Return the catalog plans eligible for pricing, in catalog order.

    Args:
        catalog: All plan records
        category: Chosen category, or None when nothing is chosen yet
        is_solo_minor: True when every selected life is in the youngest bracket
        restricted_operator: Operator keyword excluded for PF solo-minor quotes

    Returns:
        Tuple of eligible PlanRecord (empty when no category is chosen)
    """
    if category is None:
        return ()

    plans = [plan for plan in catalog if plan.is_sold_under(category)]

    if excludes_restricted_operator(category, is_solo_minor):
        before = len(plans)
        plans = [plan for plan in plans if not is_restricted_operator(plan, restricted_operator)]
        logger.debug(f"Solo-minor PF quote: excluded {before - len(plans)} '{restricted_operator}' plans")

    return tuple(plans)
