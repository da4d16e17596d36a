"""
Quote Service.

Runs the full pipeline for one snapshot of the wizard state:

    catalog -> eligibility filter -> pricing -> ranking -> grouping

plus the business-rule notices for the results page. The pipeline is a pure
function of its inputs; callers invoke it explicitly after every change to
the category or the selection.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

from quote_engine import PlanRecord, QuoteCategory, QuoteResult, SelectionState
from quote_engine.catalog import get_default_catalog, load_catalog
from quote_engine.config import (
    DEFAULT_CATALOG_PATH,
    DEFAULT_RESTRICTED_OPERATOR,
    DEFAULT_RESTRICTED_OPERATOR_DISPLAY,
    QuoteConfig,
    get_config,
)
from quote_engine.services.eligibility import filter_eligible_plans
from quote_engine.services.grouping import group_offers
from quote_engine.services.pricing import price_plans
from quote_engine.services.ranking import rank_offers
from quote_engine.services.validation import is_group_solo_minor, results_notices

logger = logging.getLogger(__name__)


def build_quote(
    catalog: Iterable[PlanRecord],
    category: Optional[QuoteCategory],
    selection: SelectionState,
    *,
    group_solo_minor_offers: bool = False,
    restricted_operator: str = DEFAULT_RESTRICTED_OPERATOR,
    restricted_operator_display: str = DEFAULT_RESTRICTED_OPERATOR_DISPLAY,
) -> QuoteResult:
    """
    Compute ranked and grouped offers for a category and selection.

    Args:
        catalog: Plan records to quote from
        category: Chosen category, or None
        selection: Headcount per age bracket
        group_solo_minor_offers: For group categories with only minors selected,
            compute reference offers instead of returning none
        restricted_operator: Operator keyword excluded from PF solo-minor quotes
        restricted_operator_display: Operator name used in the exclusion notice

    Returns:
        QuoteResult with ranked offers, grouped offers and notices
    """
    notices = results_notices(category, selection, restricted_operator_display)

    if is_group_solo_minor(category, selection) and not group_solo_minor_offers:
        return QuoteResult(category=category, selection=selection, notices=notices)

    eligible = filter_eligible_plans(catalog, category, selection.is_solo_minor, restricted_operator)
    priced = price_plans(eligible, selection)
    ranked = rank_offers(priced)
    grouped = group_offers(ranked)

    return QuoteResult(
        category=category,
        selection=selection,
        ranked_offers=tuple(ranked),
        grouped_offers=tuple(grouped),
        notices=notices,
    )


class QuoteService:
    """
    Binds a plan catalog to the configured business rules.

    The wizard creates one service per process and calls quote() after
    every mutation of its selection state.
    """

    def __init__(self, catalog: Optional[Sequence[PlanRecord]] = None, config: Optional[QuoteConfig] = None):
        """
        Initialize the quote service.

        Args:
            catalog: Plan records; loaded from config.catalog_path when omitted
            config: Runtime configuration; read from the environment when omitted
        """
        self.config = config or get_config()
        if catalog is None:
            if Path(self.config.catalog_path) == DEFAULT_CATALOG_PATH:
                catalog = get_default_catalog()
            else:
                catalog = load_catalog(self.config.catalog_path)
        self.catalog = tuple(catalog)

    def quote(self, category: Optional[QuoteCategory], selection: SelectionState) -> QuoteResult:
        result = build_quote(
            self.catalog,
            category,
            selection,
            group_solo_minor_offers=self.config.group_solo_minor_offers,
            restricted_operator=self.config.restricted_operator,
            restricted_operator_display=self.config.restricted_operator_display,
        )
        logger.debug(
            f"Quote {category.value if category else '-'} lives={selection.total_lives}: "
            f"{len(result.ranked_offers)} offers in {len(result.grouped_offers)} groups"
        )
        return result

