import os
import tempfile

# Must be set before healthdiary.config is imported
_tmpdir = tempfile.mkdtemp(prefix="healthdiary-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmpdir, 'test.db')}"
os.environ.pop("GOOGLE_API_KEY", None)

import pytest
from healthdiary.auth import SessionContext, sign_up
from healthdiary.db import Base, SessionLocal, engine, init_db


@pytest.fixture(autouse=True)
def fresh_schema():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def identity(db):
    return sign_up("ada@example.com", "Ada", db)


@pytest.fixture
def context(identity):
    ctx = SessionContext()
    ctx.resolve(identity)
    return ctx
