"""
Units of work over the Flask-SQLAlchemy scoped session.

Both flavours expose the same repositories (``users``, ``videos``,
``tweets``, ``comments``, ``likes``, ``subscriptions``) bound to one session.
"""

from __future__ import annotations

from contextlib import suppress

from flask import current_app
from sqlalchemy import event, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction

from vidshare.core.extensions import db
from vidshare.repositories import (
    CommentRepository,
    LikeRepository,
    SubscriptionRepository,
    TweetRepository,
    UserRepository,
    VideoRepository,
)
from vidshare.uow.base import UnitOfWork

# Dialects that understand ``SET TRANSACTION ... READ ONLY``.
_READONLY_DIALECTS = frozenset({"postgresql", "mysql", "mariadb"})

_WRITE_VERBS = (
    "insert",
    "update",
    "delete",
    "merge",
    "replace",
    "create",
    "alter",
    "drop",
    "truncate",
)


def _block_flush(session, flush_context, instances) -> None:
    if session.new or session.dirty or session.deleted:
        raise RuntimeError(
            "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
        )


def _block_dml(conn, cursor, statement, parameters, context, executemany) -> None:
    verb = statement.lstrip().split(None, 1)[0].lower() if statement else ""
    if verb.startswith(_WRITE_VERBS):
        raise RuntimeError(f"Read-only UnitOfWork: SQL statement blocked: {verb.upper()}")


class _Repositories:
    def __init__(self, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=session)
        self.videos = VideoRepository(session=session)
        self.tweets = TweetRepository(session=session)
        self.comments = CommentRepository(session=session)
        self.likes = LikeRepository(session=session)
        self.subscriptions = SubscriptionRepository(session=session)


class SQLAlchemyUnitOfWork(_Repositories, UnitOfWork):
    """Writer scope: commit on clean exit, roll back when the block raises."""

    def __init__(self) -> None:
        super().__init__(db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(_Repositories, UnitOfWork):
    """
    Reader scope.

    Writes are refused twice over: a ``before_flush`` hook rejects pending ORM
    changes and a ``before_cursor_execute`` hook rejects DML/DDL text. When the
    scope opens its own transaction on PostgreSQL or MySQL it also sends
    ``SET TRANSACTION`` for the isolation level and ``READ ONLY``.

    Inside an already open transaction the hooks still apply, but nothing is
    sent to the server and nothing is rolled back on exit.

    :param isolation_level: Level for ``SET TRANSACTION ISOLATION LEVEL``;
        ``None`` keeps the server default.
    :param enforce_db_readonly: Send ``SET TRANSACTION READ ONLY``.
    """

    def __init__(
        self,
        *,
        isolation_level: str | None = "READ COMMITTED",
        enforce_db_readonly: bool = True,
    ) -> None:
        super().__init__(db.session)
        self.isolation_level = isolation_level
        self.enforce_db_readonly = enforce_db_readonly
        self._conn: Connection | None = None
        self._own_txn: SessionTransaction | None = None
        self._guarded = False

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        self._own_txn = self._begin_if_idle()
        self._conn = self.session.connection()
        self._guard()
        if self._own_txn is not None and self._conn.dialect.name in _READONLY_DIALECTS:
            self._set_transaction()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._own_txn is not None:
                with suppress(SQLAlchemyError):
                    self.session.rollback()
                try:
                    self._own_txn.__exit__(exc_type, exc, tb)
                finally:
                    self._own_txn = None
        finally:
            self._unguard()
            self._conn = None

    def commit(self) -> None:
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ------------------------------------------------------------------ #

    def _begin_if_idle(self) -> SessionTransaction | None:
        try:
            txn = self.session.begin()
        except InvalidRequestError:
            return None
        txn.__enter__()
        return txn

    def _set_transaction(self) -> None:
        try:
            if self.isolation_level:
                level = self.isolation_level.upper().strip()
                self.session.execute(text(f"SET TRANSACTION ISOLATION LEVEL {level}"))
            if self.enforce_db_readonly:
                self.session.execute(text("SET TRANSACTION READ ONLY"))
        except SQLAlchemyError as exc:
            current_app.logger.warning(
                "SET TRANSACTION directives failed (%s). Falling back to guards-only.", exc
            )

    def _guard(self) -> None:
        if self._guarded:
            return

        # Per-instance hooks so a nested scope never removes the outer one.
        def on_flush(session, flush_context, instances):
            _block_flush(session, flush_context, instances)

        def on_execute(conn, cursor, statement, parameters, context, executemany):
            _block_dml(conn, cursor, statement, parameters, context, executemany)

        self._hooks = (on_flush, on_execute)
        event.listen(self.session, "before_flush", on_flush)
        event.listen(self._conn, "before_cursor_execute", on_execute)
        self._guarded = True

    def _unguard(self) -> None:
        if not self._guarded:
            return
        with suppress(InvalidRequestError):
            event.remove(self.session, "before_flush", self._hooks[0])
        with suppress(InvalidRequestError):
            event.remove(self._conn, "before_cursor_execute", self._hooks[1])
        self._guarded = False
