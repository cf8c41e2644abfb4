import pytest

from portfolio import create_app
from portfolio.data import DataAccessClient
from portfolio.extensions import db as _db
from portfolio.models.user import User


@pytest.fixture
def app(tmp_path):
    app = create_app("testing", {"STORAGE_ROOT": str(tmp_path / "storage")})
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def http(app):
    return app.test_client()


@pytest.fixture
def storage(app):
    return app.extensions["object_storage"]


@pytest.fixture
def data_client(app, storage):
    return DataAccessClient(_db.session, storage)


@pytest.fixture
def make_sections(data_client):
    """Insert sections named in order, with order_index 0..n-1."""
    def _make(*names, hidden=()):
        return [
            data_client.insert("sections", {
                "name": name,
                "is_visible": name not in hidden,
                "order_index": index,
            })
            for index, name in enumerate(names)
        ]
    return _make


def _create_user(email, password, role):
    user = User()
    user.email = email
    user.role = role
    user.set_password(password)
    _db.session.add(user)
    _db.session.commit()
    return user


def _login(http, email, password):
    response = http.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.get_json()
    return {"Authorization": f"Bearer {response.get_json()['access_token']}"}


@pytest.fixture
def admin_headers(app, http):
    _create_user("admin@example.com", "s3cret-pass", "admin")
    return _login(http, "admin@example.com", "s3cret-pass")


@pytest.fixture
def user_headers(app, http):
    _create_user("visitor@example.com", "visitor-pass", "user")
    return _login(http, "visitor@example.com", "visitor-pass")
