"""
kvmodel Persistence Layer - SQLModel Backend

Durable record store on a SQL database through SQLModel. All namespaces
share one key/value table; each row holds a record serialized as JSON.
"""

import json
import logging
from typing import Iterable, List, Mapping, Optional, Any

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlmodel import Field, Session, SQLModel, create_engine, select

from ..errors import DuplicateRecordError
from .base import Record, RecordStore

logger = logging.getLogger(__name__)


class StoredRecord(SQLModel, table=True):
    """One stored record."""
    __tablename__ = "kvmodel_records"
    __table_args__ = {"extend_existing": True}

    namespace: str = Field(primary_key=True)
    id: str = Field(primary_key=True)
    position: int = Field(default=0, index=True)
    data: str


class SQLModelStore(RecordStore):
    """
    Record store backed by a SQL database.

    Records keep their insertion order through a per-namespace position
    counter. Equality filters are evaluated on the decoded records.
    """

    def __init__(self, namespace: str, database_url: str = "sqlite://",
                 engine: Optional[Engine] = None, echo: bool = False):
        super().__init__(namespace)
        self.engine = engine if engine is not None else create_engine(database_url, echo=echo)
        SQLModel.metadata.create_all(self.engine, tables=[StoredRecord.__table__])

    def _rows(self, session: Session) -> Iterable[StoredRecord]:
        statement = (
            select(StoredRecord)
            .where(StoredRecord.namespace == self.namespace)
            .order_by(StoredRecord.position)
        )
        return session.exec(statement)

    def _row(self, session: Session, record_id: str) -> Optional[StoredRecord]:
        return session.get(StoredRecord, (self.namespace, record_id))

    def _next_position(self, session: Session) -> int:
        statement = select(func.max(StoredRecord.position)).where(
            StoredRecord.namespace == self.namespace
        )
        current = session.exec(statement).one()
        return 0 if current is None else current + 1

    def _insert(self, session: Session, record: Record, position: int) -> Record:
        record_id = self._require_id(record)
        if self._row(session, record_id) is not None:
            raise DuplicateRecordError(self.namespace, record_id)
        raw = self._dumps(record)
        session.add(StoredRecord(namespace=self.namespace, id=record_id,
                                 position=position, data=raw))
        return json.loads(raw)

    def get(self, record_id: str) -> Optional[Record]:
        with Session(self.engine) as session:
            row = self._row(session, record_id)
            return json.loads(row.data) if row is not None else None

    def list(self) -> List[Record]:
        with Session(self.engine) as session:
            return [json.loads(row.data) for row in self._rows(session)]

    def find(self, filters: Mapping[str, Any], first_only: bool = False) -> List[Record]:
        matches = []
        with Session(self.engine) as session:
            for row in self._rows(session):
                record = json.loads(row.data)
                if self.matches(record, filters):
                    matches.append(record)
                    if first_only:
                        break
        return matches

    def create(self, record: Record) -> Record:
        with Session(self.engine) as session:
            stored = self._insert(session, record, self._next_position(session))
            session.commit()
        logger.debug(f"Created {self.namespace}/{stored['id']}")
        return stored

    def bulk_create(self, records: List[Record]) -> List[Record]:
        """Store several new records in a single database transaction."""
        with Session(self.engine) as session:
            position = self._next_position(session)
            stored = []
            for offset, record in enumerate(records):
                stored.append(self._insert(session, record, position + offset))
                session.flush()
            session.commit()
        logger.debug(f"Created {len(stored)} records in {self.namespace}")
        return stored

    def update(self, record_id: str, changes: Record) -> Optional[Record]:
        with Session(self.engine) as session:
            row = self._row(session, record_id)
            if row is None:
                return None
            current = json.loads(row.data)
            current.update(changes)
            current["id"] = record_id
            raw = self._dumps(current)
            row.data = raw
            session.add(row)
            session.commit()
        logger.debug(f"Updated {self.namespace}/{record_id}")
        return json.loads(raw)

    def replace(self, record_id: str, record: Record) -> Optional[Record]:
        with Session(self.engine) as session:
            row = self._row(session, record_id)
            if row is None:
                return None
            raw = self._dumps({**record, "id": record_id})
            row.data = raw
            session.add(row)
            session.commit()
        logger.debug(f"Replaced {self.namespace}/{record_id}")
        return json.loads(raw)

    def delete(self, record_id: str) -> bool:
        with Session(self.engine) as session:
            row = self._row(session, record_id)
            if row is None:
                return False
            session.delete(row)
            session.commit()
        logger.debug(f"Deleted {self.namespace}/{record_id}")
        return True

    def truncate(self) -> None:
        with Session(self.engine) as session:
            rows = list(self._rows(session))
            for row in rows:
                session.delete(row)
            session.commit()
        logger.debug(f"Truncated {self.namespace} ({len(rows)} records)")

    def count(self) -> int:
        statement = select(func.count()).select_from(StoredRecord).where(
            StoredRecord.namespace == self.namespace
        )
        with Session(self.engine) as session:
            return session.exec(statement).one()
