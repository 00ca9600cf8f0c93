"""Storage backends for learner progress.

A backend exposes ``load()``, ``save(progress)`` and ``clear()`` and always
works on the whole progress collection at once.
"""

import logging
from typing import Sequence

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, delete, select

from triz_course.errors import StorageError
from triz_course.models import ModuleProgress

logger = logging.getLogger(__name__)


class SQLStorage:
    """Keeps the progress collection in the ``moduleprogress`` table."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def load(self) -> list[ModuleProgress]:
        try:
            with Session(self.engine) as session:
                rows = session.exec(
                    select(ModuleProgress).order_by(ModuleProgress.position)
                ).all()
                return [row.copy_record() for row in rows]
        except (SQLAlchemyError, ValueError) as exc:
            # ValueError covers JSON columns that no longer decode.
            raise StorageError("Could not load progress") from exc

    def save(self, progress: Sequence[ModuleProgress]) -> None:
        try:
            with Session(self.engine) as session:
                session.exec(delete(ModuleProgress))
                for position, record in enumerate(progress):
                    row = record.copy_record()
                    row.position = position
                    session.add(row)
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageError("Could not save progress") from exc

    def clear(self) -> None:
        try:
            with Session(self.engine) as session:
                session.exec(delete(ModuleProgress))
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageError("Could not clear progress") from exc


class MemoryStorage:
    """Process-local backend, mainly for tests."""

    def __init__(self, progress: Sequence[ModuleProgress] = ()):
        self._progress = [p.copy_record() for p in progress]
        self.saves = 0

    def load(self) -> list[ModuleProgress]:
        return [p.copy_record() for p in self._progress]

    def save(self, progress: Sequence[ModuleProgress]) -> None:
        self._progress = [p.copy_record() for p in progress]
        self.saves += 1

    def clear(self) -> None:
        self._progress = []
