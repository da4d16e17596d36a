"""
Ranking engine.

Offers are ordered by a priority weight, then by total price (cheaper
variant first). The weight comes from a business-defined table:

| Operator           | Products (in order)                         | Other products |
|--------------------|---------------------------------------------|----------------|
| Amhemed            | Ideal 10, Amhe+ 11, Plus 12                 | 19             |
| GNDI / NotreDame   | Nosso Plano 20, NotreLife 21, 200 22, 400 23| 29             |
| Eva                | -                                           | 30             |
| Fênix              | -                                           | 40             |
| Unimed             | -                                           | 50             |
| Amil               | -                                           | 60             |
| Anyone else        |                                             | 100            |

Operators are matched in table order and keywords in rule order, using
case-insensitive substring matching on the operator and product names.
Each operator owns a contiguous band of weights; the table is validated so
bands never overlap and the global fallback sorts after every band.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from quote_engine import PlanRecord, PricedOffer
from quote_engine.utils.matching import contains_keyword

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperatorPriority:
    """Weight band for one operator: ordered (keyword, weight) rules plus a band fallback."""
    aliases: Tuple[str, ...]
    keyword_rules: Tuple[Tuple[str, int], ...] = ()
    band_fallback: int = 0

    def matches(self, operator: str) -> bool:
        return any(contains_keyword(operator, alias) for alias in self.aliases)

    def weight_for(self, product_name: str) -> int:
        for keyword, weight in self.keyword_rules:
            if contains_keyword(product_name, keyword):
                return weight
        return self.band_fallback

    @property
    def band(self) -> Tuple[int, int]:
        """Lowest and highest weight this operator can produce."""
        weights = [weight for _, weight in self.keyword_rules] + [self.band_fallback]
        return min(weights), max(weights)


FALLBACK_WEIGHT = 100

PRIORITY_TABLE: Tuple[OperatorPriority, ...] = (
    OperatorPriority(
        aliases=('amhemed',),
        keyword_rules=(('ideal', 10), ('amhe+', 11), ('plus', 12)),
        band_fallback=19,
    ),
    OperatorPriority(
        aliases=('gndi', 'notredame'),
        keyword_rules=(('nosso', 20), ('notrelife', 21), ('200', 22), ('400', 23)),
        band_fallback=29,
    ),
    OperatorPriority(aliases=('eva',), band_fallback=30),
    OperatorPriority(aliases=('fênix', 'fenix'), band_fallback=40),
    OperatorPriority(aliases=('unimed',), band_fallback=50),
    OperatorPriority(aliases=('amil',), band_fallback=60),
)


def validate_priority_table(
    table: Sequence[OperatorPriority],
    fallback_weight: int = FALLBACK_WEIGHT,
) -> None:
    """
    Check that the table yields a consistent ordering.

    Raises:
        ValueError: if a keyword weight is not below its band fallback, two
            operator bands overlap, or the fallback does not exceed every band
    """
    bands = []
    for entry in table:
        if not entry.aliases:
            raise ValueError("Operator priority entry has no aliases")
        for keyword, weight in entry.keyword_rules:
            if weight >= entry.band_fallback:
                raise ValueError(
                    f"Keyword '{keyword}' weight {weight} must be below band fallback "
                    f"{entry.band_fallback} for {entry.aliases[0]}"
                )
        low, high = entry.band
        if high >= fallback_weight:
            raise ValueError(
                f"Fallback weight {fallback_weight} must exceed band {low}-{high} of {entry.aliases[0]}"
            )
        bands.append((low, high, entry.aliases[0]))

    bands.sort()
    for (low_a, high_a, name_a), (low_b, high_b, name_b) in zip(bands, bands[1:]):
        if low_b <= high_a:
            raise ValueError(f"Priority bands overlap: {name_a} {low_a}-{high_a} and {name_b} {low_b}-{high_b}")


validate_priority_table(PRIORITY_TABLE, FALLBACK_WEIGHT)


def priority_weight(
    plan: PlanRecord,
    table: Sequence[OperatorPriority] = PRIORITY_TABLE,
    fallback_weight: int = FALLBACK_WEIGHT,
) -> int:
    """Priority weight of a plan; lower sorts first."""
    for entry in table:
        if entry.matches(plan.operator):
            return entry.weight_for(plan.name)
    return fallback_weight


def rank_offers(
    offers: Iterable[PricedOffer],
    table: Sequence[OperatorPriority] = PRIORITY_TABLE,
    fallback_weight: int = FALLBACK_WEIGHT,
) -> List[PricedOffer]:
    """
    Sort offers by (priority weight, total price).

    The sort is stable: offers with equal weight and price keep their input order.
    """
    return sorted(
        offers,
        key=lambda offer: (priority_weight(offer.plan, table, fallback_weight), offer.total_price),
    )
