from test_api_assessments import make_competency, rate, set_status


def test_competency_crud(seed, as_hr, as_employee):
    domain = as_hr.post("/api/competencies/domains", json={"domain_name": "Leadership"}).get_json()
    resp = as_hr.put(f"/api/competencies/domains/{domain['id']}", json={"domain_name": "Leading"})
    assert resp.get_json()["domain_name"] == "Leading"

    category = as_hr.post("/api/competencies/categories",
                          json={"name": "People", "domain_id": domain["id"]}).get_json()
    assert category["domain"]["domain_name"] == "Leading"
    assert as_hr.post("/api/competencies/categories", json={"name": "X", "domain_id": 999}).status_code == 404

    comp = as_hr.post("/api/competencies", json={"name": "Coaching", "category_id": category["id"]}).get_json()
    resp = as_hr.put(f"/api/competencies/{comp['id']}",
                     json={"name": "Mentoring", "description": "Grows others", "category_id": category["id"]})
    assert resp.get_json()["name"] == "Mentoring"

    # everyone reads, only staff writes
    assert [c["name"] for c in as_employee.get("/api/competencies").get_json()] == ["Mentoring"]
    assert as_employee.post("/api/competencies/domains", json={"domain_name": "Nope"}).status_code == 403

    assert as_hr.delete(f"/api/competencies/{comp['id']}").status_code == 200
    assert as_hr.get("/api/competencies").get_json() == []
    assert as_hr.delete(f"/api/competencies/domains/{domain['id']}").status_code == 200
    assert as_hr.delete(f"/api/competencies/domains/{domain['id']}").status_code == 404


def test_standards_crud(seed, as_hr, as_assessor, as_employee):
    core = as_hr.post("/api/competencies/domains", json={"domain_name": "Core"}).get_json()
    tech = as_hr.post("/api/competencies/domains", json={"domain_name": "Technical"}).get_json()

    resp = as_assessor.post("/api/competencies/standards",
                            json={"name": "Punctuality", "domain_id": core["id"], "definition": "Arrives on time"})
    assert resp.status_code == 201
    standard = resp.get_json()
    assert standard["domain"]["domain_name"] == "Core"
    assert as_hr.post("/api/competencies/standards",
                      json={"name": "Code review", "domain_id": tech["id"], "definition": "Reviews within a day"}
                      ).status_code == 201

    assert as_hr.post("/api/competencies/standards",
                      json={"name": "X", "domain_id": 999, "definition": "d"}).status_code == 404
    assert as_hr.post("/api/competencies/standards",
                      json={"name": "X", "domain_id": core["id"]}).status_code == 400
    assert as_employee.post("/api/competencies/standards",
                            json={"name": "X", "domain_id": core["id"], "definition": "d"}).status_code == 403

    names = [s["name"] for s in as_employee.get("/api/competencies/standards").get_json()]
    assert names == ["Code review", "Punctuality"]
    rows = as_employee.get(f"/api/competencies/standards?domain_id={core['id']}").get_json()
    assert [s["id"] for s in rows] == [standard["id"]]

    resp = as_hr.put(f"/api/competencies/standards/{standard['id']}",
                     json={"name": "Timekeeping", "domain_id": tech["id"], "definition": "Meets agreed hours"})
    assert resp.status_code == 200
    assert resp.get_json()["domain_id"] == tech["id"]
    assert as_employee.get(f"/api/competencies/standards/{standard['id']}").get_json()["name"] == "Timekeeping"

    assert as_hr.delete(f"/api/competencies/standards/{standard['id']}").status_code == 200
    assert as_hr.get(f"/api/competencies/standards/{standard['id']}").status_code == 404


def test_proficiency_levels(seed, as_assessor):
    for n, label in [(3, "Advanced"), (1, "Novice")]:
        assert as_assessor.post("/api/competencies/levels",
                                json={"level_number": n, "label": label}).status_code == 201
    levels = as_assessor.get("/api/competencies/levels").get_json()
    assert [l["label"] for l in levels] == ["Novice", "Advanced"]
    assert as_assessor.post("/api/competencies/levels", json={"level_number": 9, "label": "Wizard"}).status_code == 400


def test_jobs_and_requirements(seed, as_hr):
    dept = as_hr.post("/api/departments", json={"name": "Engineering"}).get_json()
    comp = make_competency(as_hr)
    job = as_hr.post("/api/jobs", json={"title": "Engineer", "department_id": dept["id"]}).get_json()
    assert job["department"]["name"] == "Engineering"

    req = as_hr.post(f"/api/jobs/{job['id']}/requirements",
                     json={"competency_id": comp, "required_level": 4}).get_json()
    assert req["required_level"] == 4
    resp = as_hr.put(f"/api/jobs/{job['id']}/requirements/{req['id']}", json={"required_level": 5})
    assert resp.get_json()["required_level"] == 5
    assert as_hr.post(f"/api/jobs/{job['id']}/requirements",
                      json={"competency_id": comp, "required_level": 7}).status_code == 400

    jobs = as_hr.get("/api/jobs").get_json()
    assert len(jobs[0]["requirements"]) == 1

    assert as_hr.delete(f"/api/jobs/{job['id']}/requirements/{req['id']}").status_code == 200
    assert as_hr.delete(f"/api/jobs/{job['id']}").status_code == 200
    assert as_hr.get("/api/jobs").get_json() == []


def test_gap_analysis(seed, as_hr, as_employee):
    comm = make_competency(as_hr, "Communication")
    own = make_competency(as_hr, "Ownership")
    job = as_hr.post("/api/jobs", json={"title": "Lead"}).get_json()
    as_hr.post(f"/api/jobs/{job['id']}/requirements", json={"competency_id": comm, "required_level": 4})
    as_hr.post(f"/api/jobs/{job['id']}/requirements", json={"competency_id": own, "required_level": 3})

    url = f"/api/analytics/gap/{seed['employee']}/{job['id']}"
    rows = {r["competency_id"]: r for r in as_employee.get(url).get_json()["competencies"]}
    assert rows[comm]["current_level"] == 0
    assert rows[comm]["gap"] == 4

    self_id = as_employee.post("/api/assessments/self").get_json()["id"]
    rate(as_employee, self_id, comm, 3)
    set_status(as_employee, self_id, "IN_PROGRESS")

    body = as_hr.get(url).get_json()
    assert body["assessment_id"] == self_id
    rows = {r["competency_id"]: r for r in body["competencies"]}
    assert (rows[comm]["required_level"], rows[comm]["current_level"], rows[comm]["gap"]) == (4, 3, 1)
    assert rows[own]["gap"] == 3
    assert rows[own]["competency_name"] == "Ownership"

    assert as_employee.get(f"/api/analytics/gap/{seed['assessor']}/{job['id']}").status_code == 403
    assert as_hr.get(f"/api/analytics/gap/{seed['employee']}/999").status_code == 404
