# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Data-access layer for cases.

Reads never raise: a missing row and a failing database both come back as
``None`` (or ``[]``), so callers render "not found" for either.
"""
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ritepath.core.logging import get_logger
from ritepath.metrics.prometheus import CASE_LOOKUPS
from ritepath.models.domain import Case, CaseType

logger = get_logger(__name__)

CASE_COLS = (
    "id, case_number, deceased_name, case_type, created_at, "
    "photo_url, service_date, status"
)

PRE_NEED_ALIASES = frozenset({"Pre-Need", "PreNeed", "pre-need"})


def normalize_case_type(raw: Optional[str]) -> CaseType:
    if raw in PRE_NEED_ALIASES:
        return CaseType.PRE_NEED
    return CaseType.AT_NEED


def _iso(value: Any) -> Optional[str]:
    if not value:
        return None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def normalize_case_row(row: Mapping[str, Any]) -> Case:
    """Map a raw ``cases`` row onto :class:`Case`, defaulting every sparse field."""
    case_id = str(row["id"])
    return Case(
        id=case_id,
        case_number=str(row.get("case_number") or case_id),
        deceased_name=row.get("deceased_name") or "",
        case_type=normalize_case_type(row.get("case_type")),
        date_created=_iso(row.get("created_at")) or datetime.now(timezone.utc).isoformat(),
        photo_url=row.get("photo_url") or None,
        service_date=_iso(row.get("service_date")),
        status=row.get("status") or None,
    )


class CaseRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    def get_case_by_id(self, case_id: str) -> Optional[Case]:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    text(f"SELECT {CASE_COLS} FROM cases WHERE id = :id"),
                    {"id": case_id},
                ).mappings().first()
        except SQLAlchemyError as exc:
            CASE_LOOKUPS.labels(operation="get", outcome="error").inc()
            logger.error("Error fetching case %s: %s", case_id, exc)
            return None

        if not row:
            CASE_LOOKUPS.labels(operation="get", outcome="not_found").inc()
            return None
        CASE_LOOKUPS.labels(operation="get", outcome="found").inc()
        return normalize_case_row(row)

    def get_all_cases(self) -> List[Case]:
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(
                    text(f"SELECT {CASE_COLS} FROM cases ORDER BY created_at DESC"),
                ).mappings().all()
        except SQLAlchemyError as exc:
            CASE_LOOKUPS.labels(operation="list", outcome="error").inc()
            logger.error("Error fetching cases: %s", exc)
            return []

        CASE_LOOKUPS.labels(operation="list", outcome="found").inc()
        return [normalize_case_row(r) for r in rows]

    def verify_connection(self) -> int:
        with self._engine.connect() as conn:
            return conn.execute(text("SELECT COUNT(*) FROM cases")).scalar() or 0

    def dispose(self):
        self._engine.dispose()
