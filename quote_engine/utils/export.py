"""
Tabular export of quotes.

One row per breakdown line so the CSV shows how each total was built.
"""

import io
from typing import Iterable

import pandas as pd

from quote_engine import PricedOffer

EXPORT_COLUMNS = [
    'Rank',
    'Plan ID',
    'Operator',
    'Product',
    'Accommodation',
    'Coparticipation',
    'Age Bracket',
    'Lives',
    'Unit Price',
    'Subtotal',
    'Total',
]


def offers_to_dataframe(offers: Iterable[PricedOffer]) -> pd.DataFrame:
    """
    Flatten ranked offers into a DataFrame.

    Args:
        offers: Offers in rank order

    Returns:
        DataFrame with EXPORT_COLUMNS, one row per (offer, bracket)
    """
    rows = []
    for rank, offer in enumerate(offers, start=1):
        plan = offer.plan
        for line in offer.breakdown:
            rows.append({
                'Rank': rank,
                'Plan ID': plan.id,
                'Operator': plan.operator,
                'Product': plan.name,
                'Accommodation': plan.accommodation,
                'Coparticipation': plan.coparticipation,
                'Age Bracket': line.bracket.value,
                'Lives': line.count,
                'Unit Price': round(line.unit_price, 2),
                'Subtotal': round(line.subtotal, 2),
                'Total': round(offer.total_price, 2),
            })

    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def offers_to_csv(offers: Iterable[PricedOffer]) -> str:
    """CSV text for st.download_button."""
    df = offers_to_dataframe(offers)
    output = io.StringIO()
    df.to_csv(output, index=False)
    return output.getvalue()


def summary_dataframe(offers: Iterable[PricedOffer]) -> pd.DataFrame:
    """One row per offer with its total, for the results table."""
    rows = [
        {
            'Operator': offer.plan.operator,
            'Product': offer.plan.name,
            'Accommodation': offer.plan.accommodation,
            'Coparticipation': offer.plan.coparticipation,
            'Total': round(offer.total_price, 2),
        }
        for offer in offers
    ]
    return pd.DataFrame(rows, columns=['Operator', 'Product', 'Accommodation', 'Coparticipation', 'Total'])
