"""
Utility functions for the quote engine.
"""

from .formatting import (
    format_brl,
    format_lives,
    format_options_found,
)

from .export import (
    offers_to_csv,
    offers_to_dataframe,
    summary_dataframe,
)

from .matching import contains_keyword

__all__ = [
    'format_brl',
    'format_lives',
    'format_options_found',
    'offers_to_csv',
    'offers_to_dataframe',
    'summary_dataframe',
    'contains_keyword',
]
