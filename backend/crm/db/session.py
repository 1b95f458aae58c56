import os
from typing import Any, Generator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

import crm.db.base  # noqa: F401
from crm.core.logging_setup import logger

TIMESTAMPED_TABLES = ("companies", "users", "contacts", "leads", "tasks")

UPDATED_AT_FUNCTION_SQL = """
CREATE OR REPLACE FUNCTION update_updated_at_column()
RETURNS TRIGGER AS $$
BEGIN
    NEW.updated_at = NOW();
    RETURN NEW;
END;
$$ LANGUAGE plpgsql
"""


def updated_at_trigger_statements(table: str) -> list[str]:
    trigger = f"update_{table}_updated_at"
    return [
        f"DROP TRIGGER IF EXISTS {trigger} ON {table}",
        f"CREATE TRIGGER {trigger} BEFORE UPDATE ON {table} "
        "FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()",
    ]


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _configure_sqlite_connection(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    # Built-in lower() only folds ASCII; search terms are lowered with str.lower().
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def build_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Create the pooled engine shared by every request of the process."""
    connect_args: dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    elif database_url.startswith("postgresql"):
        client_encoding = os.getenv("POSTGRES_CLIENT_ENCODING", "UTF8")
        connect_args["options"] = f"-c client_encoding={client_encoding}"

    engine = create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )
    if database_url.startswith("sqlite"):
        # SQLite ignores ON DELETE CASCADE / SET NULL unless enabled per connection.
        event.listen(engine, "connect", _configure_sqlite_connection)
    return engine


def init_db(engine: Engine) -> None:
    SQLModel.metadata.create_all(bind=engine)
    if engine.dialect.name == "postgresql":
        _install_updated_at_triggers(engine)


def get_session(engine: Engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def _install_updated_at_triggers(engine: Engine) -> None:
    try:
        with engine.begin() as conn:
            conn.exec_driver_sql(UPDATED_AT_FUNCTION_SQL)
            for table in TIMESTAMPED_TABLES:
                for statement in updated_at_trigger_statements(table):
                    conn.exec_driver_sql(statement)
    except SQLAlchemyError as exc:  # pragma: no cover - requires postgres
        logger.error("Failed to install updated_at triggers: %s", exc)
        raise
