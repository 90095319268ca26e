"""Key-value queries on the kv_store table."""

from sqlite3 import Connection


def get_value(conn: Connection, key: str) -> str | None:
    """Get the raw stored value for a key, or None."""
    row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
    return row["value"] if row else None


def set_value(conn: Connection, key: str, value: str) -> None:
    """Insert or replace a key's value."""
    conn.execute(
        """
        INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, datetime('now'))
        ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
        """,
        (key, value),
    )


def delete_value(conn: Connection, key: str) -> bool:
    cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
    return cursor.rowcount > 0
