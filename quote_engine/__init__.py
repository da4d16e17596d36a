"""
Quote Engine

Core types for the health plan quoting wizard.

The engine turns a purchase category and a headcount per age bracket into a
ranked, grouped list of priced plan offers. Everything here is immutable;
the services in quote_engine.services are pure functions over these types.

Categories:
- PF: Individual (CPF)
- PME_1: Micro-business, exactly one life (titular)
- PME_2: Small group, 2-29 lives
- PME_30: Large group, 30+ lives (priced from the 2-29 table, for reference)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


class AgeBracket(Enum):
    """
    ANS age bands used to price a policy.

    Definition order is the display order and the order of every
    per-bracket breakdown. RANGE_0_18 is the youngest bracket.
    """
    RANGE_0_18 = "0-18"
    RANGE_19_23 = "19-23"
    RANGE_24_28 = "24-28"
    RANGE_29_33 = "29-33"
    RANGE_34_38 = "34-38"
    RANGE_39_43 = "39-43"
    RANGE_44_48 = "44-48"
    RANGE_49_53 = "49-53"
    RANGE_54_58 = "54-58"
    RANGE_59_PLUS = "59+"

    @property
    def label(self) -> str:
        """Label shown next to the counter, e.g. '0 a 18 anos'."""
        if self is AgeBracket.RANGE_59_PLUS:
            return "59 anos ou mais"
        low, high = self.value.split("-")
        return f"{low} a {high} anos"

    @classmethod
    def youngest(cls) -> "AgeBracket":
        return cls.RANGE_0_18

    @classmethod
    def parse(cls, value) -> Optional["AgeBracket"]:
        """
        Resolve a bracket from an enum member, its value ('19-23') or its name.

        Unknown values return None and are logged; callers treat them as absent.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for bracket in cls:
            if text == bracket.value or text == bracket.name:
                return bracket
        logger.warning(f"Ignoring unknown age bracket: {value!r}")
        return None


class QuoteCategory(Enum):
    """
    Purchase category selected at the start of a quote.

    Determines which plans are eligible and which business rules apply.
    """
    PF = "PF"
    PME_1 = "PME_1"
    PME_2 = "PME_2"
    PME_30 = "PME_30"

    @property
    def is_group(self) -> bool:
        """True for every company (CNPJ/MEI) category."""
        return self.value.startswith("PME")

    @property
    def title(self) -> str:
        return CATEGORY_TITLES[self]

    @classmethod
    def parse(cls, value) -> Optional["QuoteCategory"]:
        """Resolve a category code; unknown codes return None and are logged."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().upper()
        for category in cls:
            if text == category.value:
                return category
        logger.warning(f"Ignoring unknown quote category: {value!r}")
        return None


CATEGORY_TITLES = {
    QuoteCategory.PF: "Pessoa Física",
    QuoteCategory.PME_1: "CNPJ / MEI (1 Vida)",
    QuoteCategory.PME_2: "CNPJ / MEI (2-29 Vidas)",
    QuoteCategory.PME_30: "CNPJ / MEI (+30 Vidas)",
}

# PME_1 accepts only the titular
SINGLE_LIFE_LIMIT = 1


class NoticeCode(Enum):
    """Identifies a business-rule message shown alongside the quote."""
    SOLO_MINOR_OPERATOR_EXCLUDED = "solo_minor_operator_excluded"
    LARGE_GROUP_REFERENCE_PRICING = "large_group_reference_pricing"
    GROUP_REQUIRES_ADULT = "group_requires_adult"
    SINGLE_LIFE_LIMIT = "single_life_limit"
    NO_LIVES = "no_lives"
    NO_CATEGORY = "no_category"


@dataclass(frozen=True)
class QuoteNotice:
    """Informational or blocking message produced by the business rules."""
    code: NoticeCode
    title: str
    message: str
    level: str = "info"  # info, warning, error


@dataclass(frozen=True)
class SelectionState:
    """
    Headcount per age bracket.

    Every bracket is always present (default 0) and counts are never negative.
    Instances are immutable; use incremented()/decremented() to derive new ones.
    """
    counts: Mapping[AgeBracket, int] = field(default_factory=dict)

    def __post_init__(self):
        normalized = {bracket: 0 for bracket in AgeBracket}
        for bracket, count in dict(self.counts).items():
            if not isinstance(bracket, AgeBracket):
                continue
            normalized[bracket] = max(0, int(count))
        object.__setattr__(self, 'counts', MappingProxyType(normalized))

    def __hash__(self):
        return hash(tuple(self.counts.items()))

    @classmethod
    def empty(cls) -> "SelectionState":
        return cls()

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> "SelectionState":
        """
        Build a selection from a mapping keyed by AgeBracket or bracket label.

        Unrecognized keys are ignored (see AgeBracket.parse).
        """
        counts: Dict[AgeBracket, int] = {}
        for key, count in mapping.items():
            bracket = AgeBracket.parse(key)
            if bracket is not None:
                counts[bracket] = counts.get(bracket, 0) + int(count)
        return cls(counts)

    def __getitem__(self, bracket: AgeBracket) -> int:
        return self.counts[bracket]

    @property
    def total_lives(self) -> int:
        return sum(self.counts.values())

    @property
    def is_solo_minor(self) -> bool:
        """True when people are selected and all of them are in the youngest bracket."""
        total = self.total_lives
        if total == 0:
            return False
        return self.counts[AgeBracket.youngest()] == total

    def active_brackets(self) -> List[Tuple[AgeBracket, int]]:
        """(bracket, count) pairs with count > 0, in bracket order."""
        return [(bracket, self.counts[bracket]) for bracket in AgeBracket if self.counts[bracket] > 0]

    def incremented(self, bracket: AgeBracket) -> "SelectionState":
        counts = dict(self.counts)
        counts[bracket] += 1
        return SelectionState(counts)

    def decremented(self, bracket: AgeBracket) -> "SelectionState":
        counts = dict(self.counts)
        counts[bracket] = max(0, counts[bracket] - 1)
        return SelectionState(counts)


@dataclass(frozen=True)
class PlanRecord:
    """
    One catalog entry.

    Records sharing operator, name and accommodation but differing in
    coparticipation are variants of the same product.
    """
    id: str
    operator: str
    name: str
    accommodation: str  # Enfermaria or Apartamento
    categories: frozenset
    prices: Mapping[AgeBracket, float] = field(default_factory=dict)
    coparticipation: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'categories', frozenset(self.categories))
        object.__setattr__(self, 'prices', MappingProxyType(dict(self.prices)))

    def __hash__(self):
        return hash((self.id, self.operator, self.name, self.accommodation, self.coparticipation))

    def is_sold_under(self, category: Optional[QuoteCategory]) -> bool:
        return category is not None and category in self.categories

    def price_for(self, bracket: AgeBracket) -> float:
        """Unit price for a bracket; 0 when the plan does not price it."""
        return self.prices.get(bracket) or 0.0


@dataclass(frozen=True)
class BreakdownLine:
    """Cost of one age bracket within an offer."""
    bracket: AgeBracket
    count: int
    unit_price: float
    subtotal: float


@dataclass(frozen=True)
class PricedOffer:
    """A plan priced for a specific selection. Recomputed on every change."""
    plan: PlanRecord
    total_price: float
    breakdown: Tuple[BreakdownLine, ...] = ()

    @property
    def group_key(self) -> Tuple[str, str, str]:
        return (self.plan.operator, self.plan.name, self.plan.accommodation)


@dataclass(frozen=True)
class OfferGroup:
    """Variants of one product (same operator, name and accommodation), in rank order."""
    offers: Tuple[PricedOffer, ...]

    def __post_init__(self):
        if not self.offers:
            raise ValueError("OfferGroup requires at least one offer")
        object.__setattr__(self, 'offers', tuple(self.offers))

    def __iter__(self):
        return iter(self.offers)

    def __len__(self):
        return len(self.offers)

    @property
    def key(self) -> Tuple[str, str, str]:
        return self.offers[0].group_key

    @property
    def lead(self) -> PricedOffer:
        return self.offers[0]

    @property
    def lowest_price(self) -> float:
        return min(offer.total_price for offer in self.offers)


@dataclass(frozen=True)
class QuoteResult:
    """Output of one pipeline run: ranked offers, grouped offers and notices."""
    category: Optional[QuoteCategory]
    selection: SelectionState
    ranked_offers: Tuple[PricedOffer, ...] = ()
    grouped_offers: Tuple[OfferGroup, ...] = ()
    notices: Tuple[QuoteNotice, ...] = ()

    @property
    def total_lives(self) -> int:
        return self.selection.total_lives

    @property
    def is_empty(self) -> bool:
        return not self.ranked_offers

    def has_notice(self, code: NoticeCode) -> bool:
        return any(notice.code is code for notice in self.notices)

