"""
Pytest fixtures for TariffSmart tests.

Provides:
- Flask app and test client fixtures
- Database fixtures with in-memory SQLite
- Seeded reference data (countries, catalogue, flags, learning content)
- Users for each role and logged-in clients
"""

import os
import sys
import pytest

# Set testing environment before importing app
os.environ["TESTING"] = "true"
os.environ["AUTO_SEED"] = "false"
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite:///:memory:"

# Add the project root to the Python path
project_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_dir not in sys.path:
    sys.path.insert(0, project_dir)


# ============================================================================
# Flask App Fixtures
# ============================================================================

@pytest.fixture
def app():
    """Create Flask application for testing."""
    from tariffsmart.web import create_app
    from tariffsmart.web.db import db

    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "SQLALCHEMY_TRACK_MODIFICATIONS": False,
        "SECRET_KEY": "test-secret-key",
        "AUTO_SEED": False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def db_session(app):
    """Database session for direct DB access in tests."""
    from tariffsmart.web.db import db
    with app.app_context():
        yield db.session


@pytest.fixture
def seeded_app(app):
    """App with the reference data loaded."""
    from tariffsmart.web.db.seed import seed_reference_data

    with app.app_context():
        seed_reference_data()
    return app


@pytest.fixture
def seeded_client(seeded_app):
    return seeded_app.test_client()


# ============================================================================
# User and Auth Fixtures
# ============================================================================

def _make_user(app, username, role):
    from tariffsmart.web.db.models import User

    with app.app_context():
        user = User.register(
            username=username,
            password="testpassword123",
            email=f"{username}@example.com",
            role=role,
        )
        # Return dict to avoid detached instance issues
        return {"id": user.id, "username": user.username, "role": user.role}


def _login(client, app, user):
    with app.app_context():
        with client.session_transaction() as session:
            session["user_id"] = user["id"]
    return client


@pytest.fixture
def test_user(app):
    """A regular (role "user") account."""
    return _make_user(app, "testuser", "user")


@pytest.fixture
def premium_user(app):
    return _make_user(app, "premiumuser", "premium")


@pytest.fixture
def editor_user(app):
    return _make_user(app, "editoruser", "editor")


@pytest.fixture
def admin_user(app):
    return _make_user(app, "adminuser", "admin")


@pytest.fixture
def logged_in_client(client, test_user, app):
    """Client with logged-in user session."""
    return _login(client, app, test_user)


@pytest.fixture
def premium_client(client, premium_user, app):
    return _login(client, app, premium_user)


@pytest.fixture
def editor_client(client, editor_user, app):
    return _login(client, app, editor_user)


@pytest.fixture
def admin_client(client, admin_user, app):
    return _login(client, app, admin_user)


# ============================================================================
# Helper Fixtures
# ============================================================================

@pytest.fixture
def sample_rates():
    """Rate table with the two countries used in most calculator examples."""
    from tariffsmart.services.tariff_calculator import CountryRateTable

    return CountryRateTable.from_mapping({
        "China": {"base": 10, "reciprocal": 45, "effective_date": "April 9, 2025"},
        "Vietnam": {"base": 10, "reciprocal": 25, "effective_date": "April 9, 2025"},
    })


@pytest.fixture
def sample_countries(app):
    """Insert China and Vietnam only (no other reference data)."""
    from tariffsmart.web.db.models import Country

    with app.app_context():
        Country.create(name="China", base_tariff=10, reciprocal_tariff=45, effective_date="April 9, 2025")
        Country.create(name="Vietnam", base_tariff=10, reciprocal_tariff=25, effective_date="April 9, 2025")
