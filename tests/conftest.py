import pytest

import db


@pytest.fixture
def database(tmp_path):
    """Fresh database file with the default admin and sample data."""
    db.use_database(str(tmp_path / "stock.db"))
    db.init_db()
    yield
    db.close_db()


@pytest.fixture
def empty_database(tmp_path):
    db.use_database(str(tmp_path / "empty.db"))
    db.init_db(seed=False)
    yield
    db.close_db()
