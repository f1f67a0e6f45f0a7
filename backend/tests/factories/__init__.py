"""factory_boy base wired to whatever session the ``session`` fixture installed."""

from __future__ import annotations

import factory
from sqlalchemy.orm import scoped_session

_bound: scoped_session | None = None


def bind_session(session: scoped_session | None) -> None:
    global _bound
    _bound = session


def current_session() -> scoped_session:
    if _bound is None:
        raise RuntimeError("No test session bound; request the 'session' fixture first.")
    return _bound


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    class Meta:
        abstract = True
        sqlalchemy_session_factory = current_session
        # "commit" only releases the test's inner savepoint.
        sqlalchemy_session_persistence = "commit"
