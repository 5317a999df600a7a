from datetime import datetime, timedelta, timezone

from hrmoffice.extensions import db
from hrmoffice.models.user import User


def test_profile_lock_lifecycle(app, seed, as_hr, as_employee):
    me = f"/api/users/{seed['employee']}"
    data = as_employee.get(me).get_json()
    assert data["onboarding_completed"] is False
    assert data["can_edit"] is True

    # edits before onboarding never lock
    resp = as_employee.put(me, json={"phone": "555-0100"})
    assert resp.status_code == 200
    assert resp.get_json()["is_locked_until"] is None

    dept = as_hr.post("/api/departments", json={"name": "Engineering"}).get_json()
    resp = as_employee.put(f"/api/employees/{seed['employee']}/departments", json={"department_ids": [dept["id"]]})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["onboarding_completed"] is True
    assert body["can_edit"] is True
    assert body["department_ids"] == [dept["id"]]

    resp = as_employee.put(me, json={"first_name": "Em"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["first_name"] == "Em"
    assert body["can_edit"] is False
    assert body["time_until_editable"] == "12h 0m"

    resp = as_employee.put(me, json={"first_name": "Emily"})
    assert resp.status_code == 423
    assert resp.get_json()["error"].startswith("Profile locked. Try again in 11h")

    resp = as_employee.put(f"/api/employees/{seed['employee']}/departments", json={"department_ids": []})
    assert resp.status_code == 423

    # HR edits are never gated
    assert as_hr.put(me, json={"last_name": "Stone-Reyes"}).status_code == 200

    with app.app_context():
        user = db.session.get(User, seed["employee"])
        assert user.first_name == "Em"
        user.is_locked_until = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(seconds=1)
        db.session.commit()
    assert as_employee.put(me, json={"first_name": "Emily"}).status_code == 200


def test_employee_only_edits_self(seed, as_employee):
    assert as_employee.put(f"/api/users/{seed['assessor']}", json={"phone": "1"}).status_code == 403
    assert as_employee.get(f"/api/users/{seed['hr']}").status_code == 403


def test_assessor_cannot_edit_profiles(seed, as_assessor):
    assert as_assessor.put(f"/api/users/{seed['employee']}", json={"phone": "1"}).status_code == 403


def test_departments_requires_a_list(seed, as_hr):
    resp = as_hr.put(f"/api/employees/{seed['employee']}/departments", json={"department_ids": 3})
    assert resp.status_code == 400


def test_department_sync_creates_general_job(app, seed, as_hr):
    d1 = as_hr.post("/api/departments", json={"name": "Sales"}).get_json()["id"]
    d2 = as_hr.post("/api/departments", json={"name": "Support"}).get_json()["id"]
    url = f"/api/employees/{seed['employee']}/departments"
    assert sorted(as_hr.put(url, json={"department_ids": [d1, d2]}).get_json()["department_ids"]) == [d1, d2]
    assert as_hr.put(url, json={"department_ids": [d2]}).get_json()["department_ids"] == [d2]

    jobs = as_hr.get("/api/jobs").get_json()
    assert {j["title"] for j in jobs} == {"General"}
    # HR saves do not complete onboarding
    assert as_hr.get(f"/api/users/{seed['employee']}").get_json()["onboarding_completed"] is False


def test_list_users_is_staff_only(seed, as_hr, as_employee):
    emails = {u["email"] for u in as_hr.get("/api/users").get_json()}
    assert emails == {"hr@acme.com", "assessor@acme.com", "employee@acme.com"}
    assert as_employee.get("/api/users").status_code == 403


def test_role_change_and_delete(seed, as_hr):
    resp = as_hr.put(f"/api/users/{seed['assessor']}/role", json={"role": "EMPLOYEE"})
    assert resp.get_json()["role"] == "EMPLOYEE"
    assert as_hr.put(f"/api/users/{seed['assessor']}/role", json={"role": "CEO"}).status_code == 400
    assert as_hr.delete(f"/api/users/{seed['hr']}").status_code == 400
    assert as_hr.delete(f"/api/users/{seed['assessor']}").status_code == 200
    assert as_hr.get(f"/api/users/{seed['assessor']}").status_code == 404


def test_users_of_other_orgs_are_not_found(seed, as_hr):
    assert as_hr.get(f"/api/users/{seed['outsider']}").status_code == 404


def test_unauthenticated_requests_get_json_401(client, seed):
    resp = client.get("/api/users")
    assert resp.status_code == 401
    assert "error" in resp.get_json()
