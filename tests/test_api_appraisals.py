from hrmoffice.extensions import db
from hrmoffice.models.appraisal import Appraisal, AppraisalQuestion
from hrmoffice.models.user import User
from hrmoffice.services.appraisals import DEFAULT_QUESTIONS


def questions(client):
    resp = client.get("/api/appraisals/questions")
    assert resp.status_code == 200
    return resp.get_json()


def answer(client, appraisal_id, question_id, value, comment=None):
    body = {"question_id": question_id, "rating": value}
    if comment is not None:
        body["comment"] = comment
    return client.post(f"/api/appraisals/{appraisal_id}/responses", json=body)


def set_status(client, appraisal_id, status):
    return client.put(f"/api/appraisals/{appraisal_id}/status", json={"status": status})


def complete(client, appraisal_id):
    assert set_status(client, appraisal_id, "IN_PROGRESS").status_code == 200
    return set_status(client, appraisal_id, "COMPLETED")


def assign(hr, seed, assessor_id=None):
    body = {"assessor_id": assessor_id or seed["assessor"], "employee_id": seed["employee"]}
    assert hr.post("/api/assignments", json=body).status_code == 201


def test_default_questions_are_seeded_once(app, seed, as_employee, as_hr):
    rows = questions(as_employee)
    assert len(rows) == len(DEFAULT_QUESTIONS)
    assert [q["order"] for q in rows] == list(range(1, len(DEFAULT_QUESTIONS) + 1))
    assert rows[0]["key"] == "competency_match"
    assert rows[0]["title"] == "COMPETENCY MATCH"
    assert rows[1]["key"] == "aligned_kpis"
    assert rows[-1]["key"] == "profit_impact"

    assert len(questions(as_hr)) == len(DEFAULT_QUESTIONS)
    with app.app_context():
        assert AppraisalQuestion.query.filter_by(org_id=seed["org_id"]).count() == len(DEFAULT_QUESTIONS)
        assert AppraisalQuestion.query.filter_by(org_id=seed["other_org_id"]).count() == 0


def test_self_appraisal_flow(app, seed, as_hr, as_assessor, as_employee):
    assign(as_hr, seed)
    q1, q2 = [q["id"] for q in questions(as_employee)[:2]]

    resp = as_employee.post("/api/appraisals/self")
    assert resp.status_code == 201
    self_id = resp.get_json()["id"]

    resp = answer(as_employee, self_id, q1, 4, "on target")
    assert resp.status_code == 201
    assert resp.get_json()["employee_rating"] == 4
    assert resp.get_json()["employee_comment"] == "on target"
    resp = answer(as_employee, self_id, q1, 5)
    assert resp.status_code == 200
    assert resp.get_json()["employee_rating"] == 5
    assert resp.get_json()["employee_comment"] == "on target"
    assert answer(as_employee, self_id, q2, 2).status_code == 201

    data = as_employee.get(f"/api/appraisals/{self_id}").get_json()
    assert data["employee_rating"] == 3.5
    assert data["assessor_rating"] == 0.0

    # an assigned assessor reads the answers but does not write them
    assert as_assessor.get(f"/api/appraisals/{self_id}/responses").status_code == 200
    assert answer(as_assessor, self_id, q1, 1).status_code == 403
    assert set_status(as_assessor, self_id, "IN_PROGRESS").status_code == 403

    assert complete(as_employee, self_id).status_code == 200
    rows = as_assessor.get("/api/appraisals?type=ASSESSOR").get_json()
    assert len(rows) == 1
    assessor_row = rows[0]
    assert assessor_row["assessor_id"] == seed["assessor"]
    assert assessor_row["employee_id"] == seed["employee"]
    assert assessor_row["status"] == "PENDING"

    resp = answer(as_assessor, assessor_row["id"], q1, 3, "mostly")
    assert resp.status_code == 201
    assert resp.get_json()["assessor_rating"] == 3
    assert resp.get_json()["employee_rating"] is None

    # the employee still sees their own assessor appraisal
    own = as_employee.get("/api/appraisals").get_json()
    assert {a["id"] for a in own} == {self_id, assessor_row["id"]}


def test_closed_appraisal_rejects_responses(seed, as_employee):
    q = questions(as_employee)[0]["id"]
    self_id = as_employee.post("/api/appraisals/self").get_json()["id"]
    assert answer(as_employee, self_id, q, 4).status_code == 201
    assert complete(as_employee, self_id).status_code == 200

    resp = answer(as_employee, self_id, q, 1)
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "Appraisal is closed"
    rows = as_employee.get(f"/api/appraisals/{self_id}/responses").get_json()
    assert [r["employee_rating"] for r in rows] == [4]


def test_appraisal_status_moves_one_step_at_a_time(seed, as_employee):
    self_id = as_employee.post("/api/appraisals/self").get_json()["id"]
    assert set_status(as_employee, self_id, "COMPLETED").status_code == 409
    assert set_status(as_employee, self_id, "PENDING").status_code == 200
    resp = set_status(as_employee, self_id, "IN_PROGRESS")
    assert resp.status_code == 200
    started = resp.get_json()["started_at"]
    assert set_status(as_employee, self_id, "IN_PROGRESS").get_json()["started_at"] == started
    assert set_status(as_employee, self_id, "PENDING").status_code == 409
    assert set_status(as_employee, self_id, "DONE").status_code == 400


def test_fan_out_targets_assigned_assessors_only(app, seed, as_hr, as_employee):
    with app.app_context():
        other = User(org_id=seed["org_id"], email="second@acme.com", role="ASSESSOR",
                     first_name="Sam", last_name="Lee")
        other.set_password("password123")
        unassigned = User(org_id=seed["org_id"], email="third@acme.com", role="ASSESSOR",
                          first_name="Kim", last_name="Park")
        unassigned.set_password("password123")
        db.session.add_all([other, unassigned])
        db.session.commit()
        other_id = other.id
    assign(as_hr, seed)
    assign(as_hr, seed, other_id)

    self_id = as_employee.post("/api/appraisals/self").get_json()["id"]
    assert complete(as_employee, self_id).status_code == 200
    with app.app_context():
        rows = Appraisal.query.filter_by(type="ASSESSOR", employee_id=seed["employee"]).all()
        assert sorted(r.assessor_id for r in rows) == sorted([seed["assessor"], other_id])

    # a second self appraisal does not duplicate the assessor ones
    second = as_employee.post("/api/appraisals/self").get_json()["id"]
    assert complete(as_employee, second).status_code == 200
    with app.app_context():
        assert Appraisal.query.filter_by(type="ASSESSOR", employee_id=seed["employee"]).count() == 2


def test_appraisal_access_rules(app, seed, as_hr, as_assessor, as_employee):
    q = questions(as_hr)[0]["id"]
    self_id = as_employee.post("/api/appraisals/self").get_json()["id"]

    # not assigned yet: the assessor neither lists nor reads it
    assert as_assessor.get("/api/appraisals").get_json() == []
    assert as_assessor.get(f"/api/appraisals/{self_id}").status_code == 403
    assert as_assessor.post("/api/appraisals/self").status_code == 403
    assert as_employee.post("/api/appraisals/assessor", json={"employee_id": seed["employee"]}).status_code == 403

    resp = as_hr.post("/api/appraisals/assessor", json={"employee_id": seed["employee"]})
    assert resp.status_code == 201
    hr_row = resp.get_json()
    assert hr_row["assessor_id"] == seed["hr"]
    assert as_hr.post("/api/appraisals/assessor", json={"employee_id": seed["assessor"]}).status_code == 400
    assert answer(as_hr, hr_row["id"], q, 4).status_code == 201
    assert answer(as_assessor, hr_row["id"], q, 4).status_code == 403
    assert answer(as_hr, hr_row["id"], q, 9).status_code == 400
    assert answer(as_hr, hr_row["id"], 99999, 3).status_code == 400

    assert len(as_hr.get("/api/appraisals").get_json()) == 2
    assert as_hr.get("/api/appraisals/99999").status_code == 404
