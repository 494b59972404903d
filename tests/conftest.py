from datetime import datetime

import pytest
from werkzeug.security import generate_password_hash

from app import create_app
from utils.db import get_db, init_db

SEED = """
INSERT INTO restaurants (id, rname, cuisine) VALUES
    (1, 'Ah Hock Kitchen', 'Hainanese'),
    (2, 'Sakura Sushi', 'Japanese');

INSERT INTO branches (id, restaurant_id, bname, baddress, bphone) VALUES
    (1, 1, 'Bugis', '12 Victoria Street', '6123 4567'),
    (2, 1, 'Tampines', '5 Tampines Avenue', '6234 5678'),
    (3, 2, 'Orchard', '1 Orchard Road', '6345 6789');

INSERT INTO timeslots (branch_id, dateslot, timeslot, numslots) VALUES
    (1, '2000-01-01', '18:00', 10),
    (1, '2099-01-01', '18:00', 10),
    (1, '2099-01-01', '19:30', 4),
    (1, '2099-01-02', '18:00', 6),
    (3, '2099-01-01', '18:00', 8);

INSERT INTO menu_items (branch_id, name, price) VALUES
    (1, 'Kaya Toast', 2.8),
    (1, 'Chicken Rice', 5.5),
    (3, 'Salmon Nigiri', 6.0);

INSERT INTO promotions (code, branch_id, description, starts_on, ends_on) VALUES
    ('WELCOME10', NULL, 'Ten percent off', '2099-01-01', '2099-12-31'),
    ('ORCHARD5', 3, 'Five dollars off at Orchard', '2099-01-01', '2099-12-31'),
    ('EXPIRED', NULL, 'Long gone', '2000-01-01', '2000-12-31');
"""

USERNAME = "alice"
PASSWORD = "wonderland"


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret-key-0123456789abcdef0123456789",
        "DATABASE": str(tmp_path / "reservations.db"),
        "WTF_CSRF_ENABLED": False,
        "RATELIMIT_ENABLED": False,
        "CACHE_TYPE": "NullCache",
        "SESSION_COOKIE_SECURE": False,
    })
    with app.app_context():
        init_db()
        db = get_db()
        db.execute(
            "INSERT INTO users (id, username, password) VALUES (1, ?, ?)",
            (USERNAME, generate_password_hash(PASSWORD, method="pbkdf2:sha256")),
        )
        db.executescript(SEED)
        db.execute(
            "INSERT INTO reservations (user_id, branch_id, paxbooked, reservedslot, reserveddate) "
            "VALUES (1, 1, 3, '18:00', '2099-01-01')"
        )
        db.commit()
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    with client.session_transaction() as sess:
        sess["user_id"] = 1
        sess["username"] = USERNAME
        sess["user_login_time"] = datetime.now().isoformat()
    return client


@pytest.fixture
def db(app):
    with app.app_context():
        yield get_db()


@pytest.fixture
def read_flashes():
    """Return the flashed (category, message) pairs waiting in a client session."""
    def read(client):
        with client.session_transaction() as sess:
            return [tuple(item) for item in sess.get("_flashes", [])]
    return read
