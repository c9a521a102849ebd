#!/usr/bin/env python3
"""
Expense Export

Converts expense records into a pandas DataFrame for CSV export and ad-hoc
analysis outside the engine.
"""

import logging
from datetime import datetime, timezone, tzinfo
from pathlib import Path

import pandas as pd

from ..analysis.categories import DEFAULT_CATALOG, CategoryCatalog
from ..core.models import Expense

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "id",
    "date",
    "payer_id",
    "category",
    "category_name",
    "description",
    "amount",
    "amount_cents",
    "is_recurring",
    "has_split_override",
]


def expenses_to_dataframe(
    expenses: list[Expense],
    tz: tzinfo = timezone.utc,
    catalog: CategoryCatalog = DEFAULT_CATALOG,
) -> pd.DataFrame:
    """
    Convert Expense domain models to a DataFrame sorted by date.

    Args:
        expenses: Expense records
        tz: Timezone for the `date` column
        catalog: Source of category display names

    Returns:
        DataFrame with EXPORT_COLUMNS; `amount` is a plain "12.34" string so
        no float conversion happens on the way out
    """
    records = [
        {
            "id": expense.id,
            "date": datetime.fromtimestamp(expense.date / 1000, tz=tz),
            "payer_id": expense.payer_id,
            "category": expense.category,
            "category_name": catalog.lookup(expense.category).name,
            "description": expense.description,
            "amount": format(expense.amount.to_decimal(), ".2f"),
            "amount_cents": expense.amount.to_cents(),
            "is_recurring": expense.is_recurring,
            "has_split_override": expense.split_details is not None,
        }
        for expense in expenses
    ]

    df = pd.DataFrame(records, columns=EXPORT_COLUMNS)
    if not df.empty:
        df = df.sort_values("date", kind="stable").reset_index(drop=True)

    logger.info("Converted %d expenses to DataFrame", len(df))
    return df


def write_expenses_csv(expenses: list[Expense], output_file: Path, tz: tzinfo = timezone.utc) -> Path:
    """Write expenses to a CSV file, creating parent directories."""
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    expenses_to_dataframe(expenses, tz=tz).to_csv(output_file, index=False)
    return output_file
