"""The catalog database handle.

Built once by the composition root and passed to every SQL repository.
``close()`` (or leaving the ``with`` block) disposes the engine; there
is no module-level connection.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, event, func, select
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from meraki.infrastructure.persistence.sql_models import Base, CategoryModel

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = (
    ("Leather Goods", "Handcrafted leather accessories and bags"),
    ("Electronics", "Cutting-edge technology and gadgets"),
    ("Fragrances", "Curated scents for men, women, and unisex"),
    ("Used/Refurbished", "Quality restored items at exceptional value"),
)


def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:

    def __init__(self, url: str) -> None:
        self._url = make_url(url)
        if self._url.get_backend_name() == "sqlite" and self._url.database not in (None, "", ":memory:"):
            Path(self._url.database).parent.mkdir(parents=True, exist_ok=True)

        self._engine = create_engine(self._url)
        if self._url.get_backend_name() == "sqlite":
            event.listen(self._engine, "connect", _enable_sqlite_foreign_keys)
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)

    # --- Lifecycle ------------------------------------------------------------

    def initialize(self) -> None:
        """Create tables and seed the default categories on an empty database."""
        Base.metadata.create_all(bind=self._engine)

        with self.session() as session:
            count = session.scalar(select(func.count()).select_from(CategoryModel))
            if count == 0:
                session.add_all(
                    CategoryModel(name=name, description=description)
                    for name, description in DEFAULT_CATEGORIES
                )
                logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))

    def close(self) -> None:
        self._engine.dispose()

    def __enter__(self) -> Database:
        self.initialize()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- Sessions -------------------------------------------------------------

    @contextmanager
    def session(self) -> Iterator[Session]:
        """A unit of work: committed on success, rolled back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
