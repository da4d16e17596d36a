"""
Services for the quote engine.

Each stage of the pipeline is a pure function; QuoteService binds them to a
catalog and the runtime configuration.
"""

from .eligibility import filter_eligible_plans
from .pricing import price_plan, price_plans
from .validation import (
    IncrementCheck,
    ProgressionCheck,
    can_progress,
    check_increment,
    check_progression,
    gate_notice,
    results_notices,
)
from .ranking import (
    FALLBACK_WEIGHT,
    PRIORITY_TABLE,
    OperatorPriority,
    priority_weight,
    rank_offers,
    validate_priority_table,
)
from .grouping import flatten_groups, group_offers
from .quote_service import QuoteService, build_quote

__all__ = [
    'filter_eligible_plans',
    'price_plan',
    'price_plans',
    'IncrementCheck',
    'ProgressionCheck',
    'can_progress',
    'check_increment',
    'check_progression',
    'gate_notice',
    'results_notices',
    'FALLBACK_WEIGHT',
    'PRIORITY_TABLE',
    'OperatorPriority',
    'priority_weight',
    'rank_offers',
    'validate_priority_table',
    'flatten_groups',
    'group_offers',
    'QuoteService',
    'build_quote',
]
