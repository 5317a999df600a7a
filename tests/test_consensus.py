import os
import random
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from hrmoffice.services.consensus import (
    ConsensusLookups, build_consensus, build_consensus_views, merge_ratings, select_consensus_pairs,
    NO_DEPARTMENT, NO_JOB_ROLE, UNKNOWN_ASSESSOR,
)
from hrmoffice.services.ratings import compute_overall

T0 = datetime(2026, 1, 5, 8, 0)


def assessment(id, kind, status="COMPLETED", employee_id=1, assessor_id=None, ratings=(), completed_at=None,
               created_at=T0):
    return {
        "id": id,
        "type": kind,
        "status": status,
        "employee_id": employee_id,
        "assessor_id": assessor_id,
        "created_at": created_at,
        "completed_at": completed_at,
        "ratings": [
            {"id": id * 100 + i, "competency_id": comp, "rating": value, "comment": f"c{comp}"}
            for i, (comp, value) in enumerate(ratings)
        ],
    }


@pytest.fixture
def lookups():
    return ConsensusLookups.from_rows(
        users=[
            {"id": 1, "first_name": "Emma", "last_name": "Stone", "email": "emma@acme.com"},
            {"id": 9, "first_name": "Aki", "last_name": "Sato", "email": "aki@acme.com"},
        ],
        competencies=[{"id": 10, "name": "Communication"}, {"id": 11, "name": "Ownership"}],
        jobs=[{"id": 3, "title": "Engineer", "department_id": 7}, {"id": 4, "title": "Lead", "department_id": 7}],
        departments=[{"id": 7, "name": "Engineering"}],
        job_assignments=[
            {"employee_id": 1, "job_id": 3, "start_date": datetime(2025, 1, 1), "created_at": T0},
            {"employee_id": 1, "job_id": 4, "start_date": datetime(2025, 6, 1), "created_at": T0},
        ],
    )


def test_merge_example(lookups):
    own = assessment(1, "SELF", ratings=[(10, 4), (11, 2)])
    theirs = assessment(2, "ASSESSOR", assessor_id=9, ratings=[(10, 2), (12, 5)])
    view = build_consensus(own, theirs, lookups)

    by_comp = {r.competency_id: r for r in view.competency_ratings}
    assert len(by_comp) == 3
    assert (by_comp[10].rating, by_comp[10].assessor_rating, by_comp[10].consensus_rating) == (4, 2, Decimal("3.0"))
    assert (by_comp[11].rating, by_comp[11].assessor_rating, by_comp[11].consensus_rating) == (2, None, Decimal("2.0"))
    assert (by_comp[12].rating, by_comp[12].assessor_rating, by_comp[12].consensus_rating) == (0, 5, Decimal("5.0"))
    assert view.employee_rating == Decimal("2.0")
    assert view.assessor_rating == Decimal("3.5")
    assert view.consensus_rating == Decimal("3.3")


def test_view_labels(lookups):
    own = assessment(1, "SELF", ratings=[(10, 4)])
    theirs = assessment(2, "ASSESSOR", assessor_id=9, ratings=[(10, 4)], completed_at=T0 + timedelta(days=1))
    view = build_consensus(own, theirs, lookups)
    assert view.employee_name == "Emma Stone"
    assert view.employee_email == "emma@acme.com"
    assert view.assessor_name == "Aki Sato"
    # most recent job assignment wins
    assert view.job_role_name == "Lead"
    assert view.department_name == "Engineering"
    assert view.last_updated == T0 + timedelta(days=1)
    assert view.competency_ratings[0].competency_name == "Communication"

    data = view.to_dict()
    assert data["id"] == "consensus-1"
    assert data["consensus_rating"] == 4.0
    assert data["competency_ratings"][0]["assessor_comments"] == "c10"


def test_placeholders_without_lookups():
    own = assessment(1, "SELF", employee_id=42, ratings=[(99, 3)])
    theirs = assessment(2, "ASSESSOR", employee_id=42, assessor_id=None, ratings=[])
    view = build_consensus(own, theirs)
    assert view.employee_name == "Employee 42"
    assert view.assessor_name == UNKNOWN_ASSESSOR
    assert view.department_name == NO_DEPARTMENT
    assert view.job_role_name == NO_JOB_ROLE
    assert view.competency_ratings[0].competency_name == "Competency 99"
    assert view.assessor_rating == Decimal("0.0")


@pytest.mark.parametrize("self_status,assessor_status", [
    ("PENDING", "COMPLETED"),
    ("IN_PROGRESS", "COMPLETED"),
    ("COMPLETED", "PENDING"),
    ("REVIEWED", "IN_PROGRESS"),
])
def test_unfinished_pairs_are_not_eligible(self_status, assessor_status):
    own = assessment(1, "SELF", status=self_status, ratings=[(10, 3)])
    theirs = assessment(2, "ASSESSOR", status=assessor_status, ratings=[(10, 3)])
    assert build_consensus(own, theirs) is None
    assert select_consensus_pairs([own, theirs]) == []
    assert build_consensus_views([own, theirs]) == []


def test_pair_must_share_employee_and_types():
    own = assessment(1, "SELF", employee_id=1)
    theirs = assessment(2, "ASSESSOR", employee_id=2)
    assert build_consensus(own, theirs) is None
    assert build_consensus(theirs, own) is None


def test_reviewed_counts_as_finished():
    own = assessment(1, "SELF", status="REVIEWED", ratings=[(10, 3)])
    theirs = assessment(2, "ASSESSOR", status="COMPLETED", ratings=[(10, 5)])
    view = build_consensus(own, theirs)
    assert view.consensus_rating == Decimal("4.0")


def test_selection_prefers_latest_completed():
    old_self = assessment(1, "SELF", completed_at=T0, ratings=[(10, 1)])
    new_self = assessment(2, "SELF", completed_at=T0 + timedelta(days=3), ratings=[(10, 5)])
    pending_self = assessment(5, "SELF", status="PENDING", completed_at=None, created_at=T0 + timedelta(days=9))
    a1 = assessment(3, "ASSESSOR", completed_at=T0 + timedelta(days=2), ratings=[(10, 3)])
    a2 = assessment(4, "ASSESSOR", completed_at=T0 + timedelta(days=1), ratings=[(10, 1)])
    pairs = select_consensus_pairs([new_self, a2, old_self, pending_self, a1])
    assert [(s["id"], a["id"]) for s, a in pairs] == [(2, 3)]


def test_employees_missing_a_side_are_left_out():
    views = build_consensus_views([
        assessment(1, "SELF", employee_id=1),
        assessment(2, "ASSESSOR", employee_id=2),
        assessment(3, "SELF", employee_id=3),
        assessment(4, "ASSESSOR", employee_id=3),
    ])
    assert [v.employee_id for v in views] == [3]


def test_views_sorted_by_employee_name(lookups):
    rows = [
        assessment(1, "SELF", employee_id=9),
        assessment(2, "ASSESSOR", employee_id=9),
        assessment(3, "SELF", employee_id=1),
        assessment(4, "ASSESSOR", employee_id=1),
    ]
    assert [v.employee_name for v in build_consensus_views(rows, lookups)] == ["Aki Sato", "Emma Stone"]


def test_duplicate_competency_last_one_wins():
    merged = merge_ratings(
        [{"competency_id": 10, "rating": 1}, {"competency_id": 10, "rating": 5}],
        [{"competency_id": 10, "rating": 3}],
    )
    assert len(merged) == 1
    assert merged[0].rating == 5
    assert merged[0].consensus_rating == Decimal("4.0")


def test_randomized_inputs_are_repeatable():
    rng = random.Random(20260301)
    for _ in range(200):
        comps = rng.sample(range(1, 30), rng.randint(0, 12))
        own = [(c, rng.randint(0, 5)) for c in comps if rng.random() < 0.7]
        theirs = [(c, rng.randint(0, 5)) for c in comps if rng.random() < 0.7]
        s = assessment(1, "SELF", ratings=own)
        a = assessment(2, "ASSESSOR", ratings=theirs)

        first, second = build_consensus(s, a), build_consensus(s, a)
        assert first == second
        assert len(first.competency_ratings) == len({c for c, _ in own} | {c for c, _ in theirs})
        assert compute_overall(s["ratings"]) == compute_overall(s["ratings"])
        for r in first.competency_ratings:
            assert Decimal("0") <= r.consensus_rating <= Decimal("5")


def test_selection_handles_aware_and_missing_timestamps():
    aware = datetime(2026, 1, 5, 8, 0, tzinfo=timezone.utc)
    undated = assessment(1, "SELF", completed_at=None, created_at=aware)
    dated = assessment(2, "SELF", completed_at=aware + timedelta(hours=1), created_at=aware)
    naive = assessment(3, "ASSESSOR", completed_at=T0, created_at=T0)
    later = assessment(4, "ASSESSOR", completed_at=aware + timedelta(days=1), created_at=None)
    pairs = select_consensus_pairs([undated, dated, naive, later])
    assert [(s["id"], a["id"]) for s, a in pairs] == [(2, 4)]
