import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from hrmoffice import create_app
from hrmoffice.extensions import db
from hrmoffice.models.organization import Organization
from hrmoffice.models.user import User

PASSWORD = "password123"


@pytest.fixture
def app(tmp_path, monkeypatch):
    from config import TestConfig
    monkeypatch.setattr(TestConfig, "LOCAL_STORAGE_DIR", str(tmp_path / "storage"))
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _user(org, email, role, first, last):
    u = User(org_id=org.id, email=email, role=role, first_name=first, last_name=last)
    u.set_password(PASSWORD)
    db.session.add(u)
    return u


@pytest.fixture
def seed(app):
    """One organization with an HR user, an assessor and an employee, plus a second org."""
    with app.app_context():
        org = Organization(name="Acme", slug="acme", email="hr@acme.com")
        other = Organization(name="Globex", slug="globex", email="hr@globex.com")
        db.session.add_all([org, other])
        db.session.flush()
        hr = _user(org, "hr@acme.com", "HR", "Hana", "Reyes")
        assessor = _user(org, "assessor@acme.com", "ASSESSOR", "Aki", "Sato")
        employee = _user(org, "employee@acme.com", "EMPLOYEE", "Emma", "Stone")
        outsider = _user(other, "hr@globex.com", "HR", "Otto", "Berg")
        db.session.commit()
        return {
            "org_id": org.id,
            "other_org_id": other.id,
            "hr": hr.id,
            "assessor": assessor.id,
            "employee": employee.id,
            "outsider": outsider.id,
        }


def login(client, email, slug="acme", password=PASSWORD):
    resp = client.post("/api/auth/login", json={"slug": slug, "email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return resp


@pytest.fixture
def as_hr(client, seed):
    login(client, "hr@acme.com")
    return client


@pytest.fixture
def as_assessor(app, seed):
    c = app.test_client()
    login(c, "assessor@acme.com")
    return c


@pytest.fixture
def as_employee(app, seed):
    c = app.test_client()
    login(c, "employee@acme.com")
    return c
