"""
Plan catalog loading.

The catalog is a static CSV with one row per plan variant:

    id, operator, name, accommodation, coparticipation, categories, 0-18, 19-23, ..., 59+

`categories` holds ';'-separated QuoteCategory codes. Each age bracket column
holds the monthly unit price; a blank cell means the plan is not offered for
that bracket. Unknown bracket columns and category codes are ignored and logged.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd

from quote_engine import AgeBracket, PlanRecord, QuoteCategory
from quote_engine.config import DEFAULT_CATALOG_PATH

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['id', 'operator', 'name', 'accommodation', 'categories']
OPTIONAL_COLUMNS = ['coparticipation']
CATEGORY_SEPARATOR = ';'


class CatalogError(ValueError):
    """Raised when a plan catalog cannot be parsed into plan records."""


def parse_categories(value: Any) -> frozenset:
    """Parse a ';'-separated list of category codes, skipping unknown ones."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return frozenset()
    if isinstance(value, str):
        codes = value.split(CATEGORY_SEPARATOR)
    else:
        codes = list(value)

    categories = set()
    for code in codes:
        if isinstance(code, str) and not code.strip():
            continue
        category = QuoteCategory.parse(code)
        if category is not None:
            categories.add(category)
    return frozenset(categories)


def parse_prices(row: Mapping[str, Any]) -> Dict[AgeBracket, float]:
    """Pick the bracket columns out of a row; blank cells are left out."""
    prices = {}
    for bracket in AgeBracket:
        value = row.get(bracket.value)
        if value is None or value == '' or pd.isna(value):
            continue
        try:
            prices[bracket] = float(value)
        except (TypeError, ValueError) as e:
            raise CatalogError(f"Invalid price {value!r} for bracket {bracket.value}") from e
    return prices


def plan_from_mapping(data: Mapping[str, Any]) -> PlanRecord:
    """
    Build a PlanRecord from a flat mapping (a CSV row or a dict literal).

    A nested 'prices' mapping keyed by bracket is also accepted.
    """
    missing = [col for col in REQUIRED_COLUMNS if col not in data]
    if missing:
        raise CatalogError(f"Plan record is missing fields: {', '.join(missing)}")

    if 'prices' in data and isinstance(data['prices'], Mapping):
        prices = {}
        for key, value in data['prices'].items():
            bracket = AgeBracket.parse(key)
            if bracket is not None and value is not None:
                prices[bracket] = float(value)
    else:
        prices = parse_prices(data)

    coparticipation = data.get('coparticipation', '')
    if coparticipation is None or (isinstance(coparticipation, float) and pd.isna(coparticipation)):
        coparticipation = ''

    return PlanRecord(
        id=str(data['id']).strip(),
        operator=str(data['operator']).strip(),
        name=str(data['name']).strip(),
        accommodation=str(data['accommodation']).strip(),
        categories=parse_categories(data['categories']),
        prices=prices,
        coparticipation=str(coparticipation).strip(),
    )


def catalog_from_records(records: Iterable[Mapping[str, Any]]) -> Tuple[PlanRecord, ...]:
    """Build an immutable catalog from plain mappings, preserving order."""
    plans = tuple(plan_from_mapping(record) for record in records)
    _check_unique_ids(plans)
    return plans


def catalog_from_dataframe(df: pd.DataFrame) -> Tuple[PlanRecord, ...]:
    """Build a catalog from a DataFrame shaped like the catalog CSV."""
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise CatalogError(f"Catalog is missing required columns: {', '.join(missing)}")

    known = set(REQUIRED_COLUMNS) | set(OPTIONAL_COLUMNS) | {b.value for b in AgeBracket}
    unknown = [col for col in df.columns if col not in known]
    if unknown:
        logger.warning(f"Ignoring unknown catalog columns: {', '.join(map(str, unknown))}")

    return catalog_from_records(df.to_dict(orient='records'))


def load_catalog(path: Optional[Union[str, Path]] = None) -> Tuple[PlanRecord, ...]:
    """
    Load the plan catalog from a CSV file.

    Args:
        path: CSV path; defaults to the bundled catalog

    Returns:
        Tuple of PlanRecord in file order

    Raises:
        CatalogError: if the file is missing or malformed
    """
    path = Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        df = pd.read_csv(path, dtype={'id': str}, keep_default_na=True)
    except FileNotFoundError as e:
        logger.error(f"Plan catalog not found: {path}")
        raise CatalogError(f"Plan catalog not found: {path}") from e
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.error(f"Could not parse plan catalog {path}: {e}")
        raise CatalogError(f"Could not parse plan catalog {path}: {e}") from e

    plans = catalog_from_dataframe(df)
    logger.info(f"Loaded plan catalog: {len(plans)} plans from {path.name}")
    return plans


@lru_cache
def get_default_catalog() -> Tuple[PlanRecord, ...]:
    """Bundled catalog, parsed once per process."""
    return load_catalog(DEFAULT_CATALOG_PATH)


def _check_unique_ids(plans: Iterable[PlanRecord]) -> None:
    seen = set()
    duplicates: List[str] = []
    for plan in plans:
        if plan.id in seen:
            duplicates.append(plan.id)
        seen.add(plan.id)
    if duplicates:
        logger.error(f"Duplicate plan ids in catalog: {duplicates}")
        raise CatalogError(f"Duplicate plan ids in catalog: {', '.join(duplicates)}")
