"""SQL fragment builders.

Values are always passed as parameters. Column names are interpolated, so
callers must only pass column names from a trusted whitelist.
"""

from typing import Any


def build_update_clause(
    data: dict[str, Any],
    exclude: set[str] | None = None
) -> tuple[str, list[Any]]:
    """Build the SET part of an UPDATE statement from a partial-update dict.

    Args:
        data: Mapping of column name to new value. None values are skipped.
        exclude: Column names that must never be updated (e.g. "id").

    Returns:
        Tuple of ("col_a = ?, col_b = ?", [value_a, value_b]).
        The clause is empty when there is nothing to update.

    Example:
        >>> build_update_clause({"title": "Buy milk", "id": "x"}, exclude={"id"})
        ('title = ?', ['Buy milk'])
    """
    exclude = exclude or set()

    fields = [
        (column, value) for column, value in data.items()
        if value is not None and column not in exclude
    ]

    clause = ", ".join(f"{column} = ?" for column, _ in fields)
    params = [value for _, value in fields]
    return clause, params
