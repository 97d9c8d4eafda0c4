# Configuration for the tests.
# Use `py.test` to run the tests.

# (This file needs to be in or above the directory where py.test is called)

import pytest


def pytest_addoption(parser):
    group = parser.getgroup("redmoon")
    group.addoption("--engine", action="store", default=None,
        help="Database URI to load sprites into (default: in-memory SQLite)")


@pytest.fixture
def session(request):
    import redmoon.db
    engine_uri = request.config.getvalue("engine") or 'sqlite://'
    session = redmoon.db.connect(engine_uri)
    engine = session.get_bind()
    yield session
    session.remove()
    redmoon.db.metadata.drop_all(bind=engine)
