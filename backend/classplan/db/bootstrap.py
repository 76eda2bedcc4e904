from __future__ import annotations

import logging

from sqlalchemy import inspect

import classplan.models  # noqa: F401
from classplan.db.base import Base
from classplan.db.session import engine

logger = logging.getLogger(__name__)

REQUIRED_TABLES = {
    "classrooms",
    "subjects",
    "faculty",
    "batches",
    "breaks",
    "timetables",
    "time_slots",
}


def _assert_required_tables() -> None:
    with engine.begin() as connection:
        table_names = set(inspect(connection).get_table_names())
        missing_tables = sorted(REQUIRED_TABLES - table_names)
        if missing_tables:
            raise RuntimeError(f"Missing required tables: {', '.join(missing_tables)}")


def ensure_schema() -> None:
    try:
        Base.metadata.create_all(bind=engine)
        _assert_required_tables()
    except Exception as exc:  # pragma: no cover - runtime environment dependent
        logger.exception("Schema bootstrap failed")
        raise RuntimeError("Schema bootstrap failed") from exc
