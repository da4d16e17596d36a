"""
Grouping engine.

Collapses ranked offers that are the same product in different copay
variants into one display group. The key (operator, name, accommodation) is
matched exactly. Groups appear in the order their key is first seen and keep
the ranked order of their variants.
"""

from typing import Dict, Iterable, List, Tuple

from quote_engine import OfferGroup, PricedOffer


def group_offers(ranked_offers: Iterable[PricedOffer]) -> List[OfferGroup]:
    grouped: Dict[Tuple[str, str, str], List[PricedOffer]] = {}
    for offer in ranked_offers:
        grouped.setdefault(offer.group_key, []).append(offer)
    return [OfferGroup(tuple(offers)) for offers in grouped.values()]


def flatten_groups(groups: Iterable[OfferGroup]) -> List[PricedOffer]:
    """Concatenate groups back into one offer list."""
    return [offer for group in groups for offer in group]
