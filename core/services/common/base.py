from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


class ServiceBase:
    def __init__(self, session: Session):
        self._session = session

    def commit(self) -> None:
        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        try:
            yield self._session
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
