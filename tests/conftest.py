import os
import sys
import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import database


@pytest.fixture
def db():
    """Fresh in-memory SQLite database with the schema created, torn down after the test."""
    database.dispose_database()
    database.init_database("sqlite://")
    database.init_db()
    yield database
    database.dispose_database()


# Keep collection focused on the tests directory; engine modules are imported
# by tests, never collected.

def pytest_ignore_collect(collection_path, config):
    text = str(collection_path)
    if os.path.sep + 'engine' + os.path.sep in text:
        return True
