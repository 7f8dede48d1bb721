"""Result-table helpers: columns come from the first record, numbers get separators."""

from collections.abc import Sequence
from typing import Any

from catalog.dataset import Record


def table_columns(results: Sequence[Record]) -> list[str]:
    if not results:
        return []
    return list(results[0].model_dump())


def format_value(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return f"{value:,}"
    return value


def format_rows(results: Sequence[Record]) -> list[dict[str, Any]]:
    """Rows in result order with numeric values as "12,500"-style strings."""
    return [
        {key: format_value(value) for key, value in record.model_dump().items()}
        for record in results
    ]
