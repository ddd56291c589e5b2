import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salesintel.core.errors import StorageError

logger = logging.getLogger(__name__)


class SessionRepository:
    """Repository bound to one SQLAlchemy session (one request)."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Unit of work: commit on success, roll back on any failure.
        Driver/ORM failures surface as StorageError.
        """
        try:
            yield self.db
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Storage failure, transaction rolled back")
            raise StorageError("Storage failure") from exc
        except Exception:
            self.db.rollback()
            raise
