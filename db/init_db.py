"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist and adds
any column missing from an older table. Schema changes are additive only.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import Database
from utils.logger import get_logger

logger = get_logger(__name__)

# table -> ordered (column, type) pairs; the first column is the primary key
TABLES: dict[str, list[tuple[str, str]]] = {
    # Accounts: email is the natural key, password is stored as given
    "users": [
        ("user_id", "UUID"),
        ("email", "VARCHAR"),
        ("password", "VARCHAR"),
        ("role", "BOOLEAN"),
    ],
    # Catalog entries
    "courses": [
        ("course_id", "UUID"),
        ("name", "VARCHAR"),
        ("url", "VARCHAR"),
        ("text", "TEXT"),
    ],
}

UNIQUE_COLUMNS: dict[str, str] = {
    "users": "email",
    "courses": "name",
}


def schema_statements() -> list[str]:
    """
    Build the DDL for every table.

    Returns:
        CREATE TABLE / ADD COLUMN / CREATE UNIQUE INDEX statements, all
        idempotent.
    """
    statements = []
    for table, columns in TABLES.items():
        pk_name, pk_type = columns[0]
        statements.append(
            f"CREATE TABLE IF NOT EXISTS {table} ({pk_name} {pk_type} PRIMARY KEY);"
        )
        for name, col_type in columns[1:]:
            statements.append(
                f"ALTER TABLE {table} ADD COLUMN IF NOT EXISTS {name} {col_type};"
            )
        unique = UNIQUE_COLUMNS.get(table)
        if unique:
            statements.append(
                f"CREATE UNIQUE INDEX IF NOT EXISTS idx_{table}_{unique} ON {table} ({unique});"
            )
    return statements


def create_tables(db: Database | None = None) -> None:
    """
    Execute the schema DDL in a single transaction.
    Safe to call multiple times.
    """
    db = db or Database()
    try:
        with db.cursor() as cur:
            for statement in schema_statements():
                cur.execute(statement)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
