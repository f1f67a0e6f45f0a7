"""Shared fixtures: one app per run, one rolled-back transaction per test.

The schema lives in an in-memory SQLite database. Every test gets a scoped
session joined to an open SAVEPOINT on a long-lived connection, so service
commits only release inner savepoints and everything is discarded afterwards.
Cloudinary is replaced by :class:`InMemoryMediaStore`.
"""

from __future__ import annotations

import os

import pytest
from faker import Faker
from sqlalchemy.orm import scoped_session, sessionmaker

from tests import factories
from vidshare.core.config import TestingConfig
from vidshare.core.extensions import MEDIA_STORE_KEY, get_token_provider
from vidshare.core.extensions import db as _db
from vidshare.factory import create_app
from vidshare.services._shared.dto import StagedFile
from vidshare.services._shared.ports import InMemoryMediaStore


@pytest.fixture(scope="session")
def upload_dir(tmp_path_factory):
    return tmp_path_factory.mktemp("uploads")


@pytest.fixture(scope="session")
def app(upload_dir):
    """Testing app on ``sqlite:///:memory:`` with uploads staged under a temp dir."""
    os.environ.pop("DATABASE_URL", None)

    class Config(TestingConfig):
        SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
        UPLOAD_TMP_DIR = str(upload_dir)

    flask_app = create_app(Config)
    flask_app.logger.setLevel("WARNING")
    return flask_app


@pytest.fixture(scope="session")
def db(app):
    """Schema for the run. No app context stays pushed: every request builds its own ``g``."""
    with app.app_context():
        _db.create_all()
    yield _db
    with app.app_context():
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(app, db):
    with app.app_context():
        conn = db.engine.connect()
    yield conn
    conn.close()


@pytest.fixture
def session(db, connection):
    """
    Scoped session installed as ``db.session`` for the duration of a test.

    The outer transaction and its SAVEPOINT stay open until teardown. The
    session always works in savepoints nested below them, so ``commit()`` and
    ``rollback()`` issued by units of work never reach the outer scope.
    ``expire_on_commit`` is off so factory rows stay readable after a request.
    """
    outer = connection.begin()
    connection.begin_nested()
    scoped = scoped_session(
        sessionmaker(
            bind=connection,
            expire_on_commit=False,
            join_transaction_mode="create_savepoint",
        )
    )

    previous = db.session
    db.session = scoped
    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = previous
        outer.rollback()


@pytest.fixture(autouse=True)
def media_store(app):
    """Fresh in-memory media host for every test."""
    store = InMemoryMediaStore()
    app.extensions[MEDIA_STORE_KEY] = store
    return store


@pytest.fixture
def stage(tmp_path):
    """Write a small file under ``tmp_path`` and return it as a staged upload."""

    def _stage(name: str = "image.png") -> StagedFile:
        path = tmp_path / name
        path.write_bytes(b"payload")
        return StagedFile(path=str(path), filename=name)

    return _stage


@pytest.fixture
def token_provider(app):
    with app.app_context():
        return get_token_provider()


@pytest.fixture
def client(app, session):
    return app.test_client()


@pytest.fixture(scope="session")
def faker():
    Faker.seed(1337)
    return Faker()


@pytest.fixture(autouse=True)
def _factory_session(session):
    factories.bind_session(session)
    yield
    factories.bind_session(None)
