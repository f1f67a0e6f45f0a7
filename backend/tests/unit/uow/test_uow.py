"""
Unit tests for the read-write and read-only units of work.
"""

from __future__ import annotations

import pytest
from sqlalchemy import func, select, text

from tests.factories.user import UserFactory
from vidshare.models import Tweet, User
from vidshare.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from vidshare.uow import SQLAlchemyUnitOfWork as RWuow


def _users(db) -> int:
    return db.session.execute(select(func.count()).select_from(User)).scalar_one()


class TestSQLAlchemyUnitOfWorkWriter:
    def test_writer_uow_commits_on_success(self, db, session):
        """
        GIVEN a writer UoW
        WHEN a user is added through the repository and the block exits cleanly
        THEN the row is visible afterwards.
        """
        initial = _users(db)

        with RWuow() as uow:
            uow.users.add(UserFactory.build())

        assert _users(db) == initial + 1

    def test_writer_uow_rolls_back_on_exception(self, db, session):
        initial = _users(db)

        with pytest.raises(RuntimeError), RWuow() as uow:
            uow.users.add(UserFactory.build())
            raise RuntimeError("boom")

        assert _users(db) == initial

    def test_repositories_share_the_session(self, session):
        with RWuow() as uow:
            assert uow.videos.session is uow.users.session is uow.subscriptions.session


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_allows_reads(self, session):
        user = UserFactory()

        with ROuow() as uow:
            assert uow.users.get(user.id).username == user.username

    def test_blocks_orm_flush_writes(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(Tweet(owner_id=1, content="hello"))
            uow.session.flush()
        session.rollback()

    def test_blocks_core_dml(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="SQL statement blocked"):
            uow.session.execute(text("DELETE FROM tweets"))

    def test_disallows_commit(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_guards_removed_after_exit(self, db, session):
        with ROuow():
            pass

        with RWuow() as uow:
            uow.users.add(UserFactory.build())
        assert _users(db) == 1
