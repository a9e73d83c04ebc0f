"""SQL for table-level metadata."""

from __future__ import annotations

from typing import Optional


def table_comment_sql(driver: str, table_name: str, comment: str) -> Optional[str]:
    """Return the statement that sets a table comment, or None for other drivers."""
    if driver == "mysql":
        return f'ALTER TABLE {table_name} COMMENT="{comment}"'
    if driver == "postgres":
        return f"COMMENT ON TABLE \"{table_name}\" IS '{comment}'"
    return None