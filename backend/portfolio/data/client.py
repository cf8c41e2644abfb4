import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError

from portfolio.domain.exceptions import DataAccessError, RecordNotFound
from portfolio.extensions import db
from portfolio.models import (
    Blog,
    Certificate,
    Experiment,
    Message,
    Project,
    Section,
    SiteSettings,
    Skill,
    SkillCategory,
)
from portfolio.normalizers.record import normalize_record
from portfolio.utils.transaction import transactional

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

COLLECTIONS = {
    "sections": Section,
    "blogs": Blog,
    "projects": Project,
    "certificates": Certificate,
    "experiments": Experiment,
    "skill_categories": SkillCategory,
    "skills": Skill,
    "messages": Message,
    "site_settings": SiteSettings,
}


class DataAccessClient:
    """
    Row and file access by collection name.

    Every write commits on its own unless it runs inside ``transaction()``,
    in which case the enclosing block commits or rolls back all of them.
    """

    def __init__(self, session=None, storage=None):
        self.session = session or db.session
        self.storage = storage
        self._transaction_depth = 0

    # ------------------------
    # Rows
    # ------------------------

    def select(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Union[str, Iterable[str], None] = None,
        limit: Optional[int] = None,
    ) -> List[Record]:
        model = self._model(collection)
        query = self.session.query(model)

        if filters:
            query = query.filter_by(**self._checked(model, filters))

        for column in self._ordering(model, order_by):
            query = query.order_by(column)

        if limit is not None:
            query = query.limit(limit)

        try:
            return [normalize_record(row) for row in query.all()]
        except SQLAlchemyError as exc:
            if not self._transaction_depth:
                self.session.rollback()
            logger.error("select on %s failed: %s", collection, exc)
            raise DataAccessError(f"Failed to read {collection}") from exc

    def get(self, collection: str, record_id: Any) -> Record:
        return normalize_record(self._row(collection, record_id))

    def insert(self, collection: str, record: Dict[str, Any]) -> Record:
        model = self._model(collection)
        row = model(**self._checked(model, record))
        self.session.add(row)
        self._write(f"insert into {collection}")
        return normalize_record(row)

    def update(self, collection: str, record_id: Any, changes: Dict[str, Any]) -> Record:
        row = self._row(collection, record_id)
        for field, value in self._checked(type(row), changes).items():
            setattr(row, field, value)
        self._write(f"update {collection}/{record_id}")
        return normalize_record(row)

    def delete(self, collection: str, record_id: Any) -> None:
        row = self._row(collection, record_id)
        self.session.delete(row)
        self._write(f"delete {collection}/{record_id}")

    @contextmanager
    def transaction(self):
        """Group several writes into one commit."""
        self._transaction_depth += 1
        try:
            with transactional(self.session):
                yield self
        except SQLAlchemyError as exc:
            raise DataAccessError("Transaction failed") from exc
        finally:
            self._transaction_depth -= 1

    # ------------------------
    # Files
    # ------------------------

    def upload(self, bucket: str, path: str, data: bytes) -> None:
        self.storage.upload(bucket, path, data)

    def get_public_url(self, bucket: str, path: str) -> str:
        return self.storage.get_public_url(bucket, path)

    # ------------------------
    # Helpers
    # ------------------------

    def _model(self, collection):
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise DataAccessError(f"Unknown collection '{collection}'") from None

    def _row(self, collection, record_id):
        model = self._model(collection)
        try:
            row = self.session.get(model, record_id)
        except SQLAlchemyError as exc:
            if not self._transaction_depth:
                self.session.rollback()
            raise DataAccessError(f"Failed to read {collection}/{record_id}") from exc

        if row is None:
            raise RecordNotFound(collection, record_id)
        return row

    @staticmethod
    def _checked(model, fields):
        columns = set(model.__table__.columns.keys())
        unknown = sorted(set(fields) - columns)
        if unknown:
            raise DataAccessError(
                f"Unknown field(s) for {model.__tablename__}: {', '.join(unknown)}"
            )
        return dict(fields)

    @staticmethod
    def _ordering(model, order_by):
        if order_by is None:
            return []
        if isinstance(order_by, str):
            order_by = [order_by]

        columns = []
        for name in order_by:
            descending = name.startswith("-")
            field = name.lstrip("-")
            column = model.__table__.columns.get(field)
            if column is None:
                raise DataAccessError(f"Cannot order {model.__tablename__} by '{field}'")
            columns.append(column.desc() if descending else column.asc())
        return columns

    def _write(self, description):
        try:
            if self._transaction_depth:
                self.session.flush()
            else:
                self.session.commit()
        except SQLAlchemyError as exc:
            if not self._transaction_depth:
                self.session.rollback()
            logger.error("%s failed: %s", description, exc)
            raise DataAccessError(f"Failed to {description}") from exc
