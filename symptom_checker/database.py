from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, Session, create_engine, select

from .schemas import HistoryEntry, SymptomQueryRecord

logger = logging.getLogger(__name__)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; every stored timestamp is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def make_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        # requests are served from a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=False, connect_args=connect_args)


class QueryHistoryStore:
    """Query history kept in the symptom_queries table."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def create_tables(self) -> None:
        SQLModel.metadata.create_all(self.engine)

    def save(
        self,
        symptoms: str,
        age: Optional[int],
        gender: Optional[str],
        response: Dict[str, Any],
    ) -> Optional[int]:
        """Persist one query. Failures are logged and reported as None."""
        try:
            with Session(self.engine) as session:
                record = SymptomQueryRecord(
                    symptoms=symptoms,
                    age=age,
                    gender=gender,
                    response=response,
                )
                session.add(record)
                session.commit()
                session.refresh(record)
                return record.id
        except SQLAlchemyError:
            logger.exception("Database save error")
            return None

    def query_recent(self, limit: int = 10) -> List[HistoryEntry]:
        with Session(self.engine) as session:
            statement = (
                select(SymptomQueryRecord)
                .order_by(SymptomQueryRecord.timestamp.desc(), SymptomQueryRecord.id.desc())
                .limit(limit)
            )
            records = session.exec(statement).all()

        return [
            HistoryEntry(
                symptoms=r.symptoms,
                age=r.age,
                gender=r.gender,
                timestamp=as_utc(r.timestamp).isoformat(),
            )
            for r in records
        ]

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            logger.warning("Database ping failed", exc_info=True)
            return False
