"""Consensus views: a SELF and an ASSESSOR assessment merged per competency.

A consensus view is never stored. It is rebuilt from the source assessments
each time it is requested, so it always reflects the latest ratings.
"""
from dataclasses import dataclass, field as dc_field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from .lifecycle import TERMINAL_STATUSES
from .profile_gate import as_utc
from .ratings import field, mean_rating, rating_value, round_rating

NO_DEPARTMENT = "No Department"
NO_JOB_ROLE = "No Job Role"
UNKNOWN_ASSESSOR = "Unknown Assessor"


def _recency(*values):
    """Sort key for optional timestamps; missing ones sort first, naive ones are UTC."""
    return tuple((v is not None, as_utc(v)) for v in values)


def _by_id(rows):
    return {field(r, "id"): r for r in rows or ()}


@dataclass(frozen=True)
class ConsensusLookups:
    """Read-only lookup tables used to label a consensus view."""
    users: Mapping[Any, Any] = dc_field(default_factory=dict)
    competencies: Mapping[Any, Any] = dc_field(default_factory=dict)
    jobs: Mapping[Any, Any] = dc_field(default_factory=dict)
    departments: Mapping[Any, Any] = dc_field(default_factory=dict)
    # employee id -> that employee's current job assignment
    job_assignments: Mapping[Any, Any] = dc_field(default_factory=dict)

    @classmethod
    def from_rows(cls, users=(), competencies=(), jobs=(), departments=(), job_assignments=()):
        current = {}
        for a in job_assignments or ():
            emp = field(a, "employee_id")
            prev = current.get(emp)
            if prev is None or latest_assignment_key(a) > latest_assignment_key(prev):
                current[emp] = a
        return cls(
            users=_by_id(users),
            competencies=_by_id(competencies),
            jobs=_by_id(jobs),
            departments=_by_id(departments),
            job_assignments=current,
        )

    def competency_name(self, competency_id):
        comp = self.competencies.get(competency_id)
        name = field(comp, "name") if comp is not None else None
        return name or f"Competency {competency_id}"

    def display_name(self, user_id, fallback):
        user = self.users.get(user_id)
        if user is None:
            return fallback
        full = f"{field(user, 'first_name') or ''} {field(user, 'last_name') or ''}".strip()
        return full or field(user, "email") or fallback

    def email(self, user_id):
        user = self.users.get(user_id)
        return (field(user, "email") or "") if user is not None else ""

    def job_for(self, employee_id):
        assignment = self.job_assignments.get(employee_id)
        if assignment is None:
            return None
        return self.jobs.get(field(assignment, "job_id"))

    def department_for(self, job):
        if job is None:
            return None
        dept_id = field(job, "department_id")
        return self.departments.get(dept_id) if dept_id is not None else None


def latest_assignment_key(assignment):
    """Most recent by start date; assignments without one fall back to creation time."""
    start = field(assignment, "start_date")
    return _recency(start if start is not None else field(assignment, "created_at"), field(assignment, "created_at"))


@dataclass(frozen=True)
class ConsensusRating:
    id: Any
    competency_id: Any
    competency_name: str
    rating: int
    comments: str
    assessor_rating: Optional[int]
    assessor_comments: str
    consensus_rating: Decimal

    def to_dict(self):
        return {
            "id": self.id,
            "competency_id": self.competency_id,
            "competency_name": self.competency_name,
            "rating": self.rating,
            "comments": self.comments,
            "assessor_rating": self.assessor_rating,
            "assessor_comments": self.assessor_comments,
            "consensus_rating": float(self.consensus_rating),
        }


@dataclass(frozen=True)
class ConsensusView:
    employee_id: Any
    employee_name: str
    employee_email: str
    department_id: Any
    department_name: str
    job_role_id: Any
    job_role_name: str
    assessor_id: Any
    assessor_name: str
    self_assessment_id: Any
    assessor_assessment_id: Any
    start_date: Optional[datetime]
    last_updated: Optional[datetime]
    competency_ratings: List[ConsensusRating]
    employee_rating: Decimal
    assessor_rating: Decimal
    consensus_rating: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": f"consensus-{self.employee_id}",
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "employee_email": self.employee_email,
            "department_id": self.department_id,
            "department_name": self.department_name,
            "job_role_id": self.job_role_id,
            "job_role_name": self.job_role_name,
            "assessor_id": self.assessor_id,
            "assessor_name": self.assessor_name,
            "self_assessment_id": self.self_assessment_id,
            "assessor_assessment_id": self.assessor_assessment_id,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
            "competency_ratings": [r.to_dict() for r in self.competency_ratings],
            "employee_rating": float(self.employee_rating),
            "assessor_rating": float(self.assessor_rating),
            "consensus_rating": float(self.consensus_rating),
        }


def is_eligible(assessment, kind) -> bool:
    return field(assessment, "type") == kind and field(assessment, "status") in TERMINAL_STATUSES


def is_eligible_pair(self_assessment, assessor_assessment) -> bool:
    return (
        self_assessment is not None
        and assessor_assessment is not None
        and is_eligible(self_assessment, "SELF")
        and is_eligible(assessor_assessment, "ASSESSOR")
        and field(self_assessment, "employee_id") == field(assessor_assessment, "employee_id")
    )


def _selection_key(assessment):
    return _recency(field(assessment, "completed_at"), field(assessment, "created_at")) + ((field(assessment, "id") or 0),)


def select_consensus_pairs(assessments):
    """Pick one eligible SELF and one eligible ASSESSOR assessment per employee.

    Only COMPLETED or REVIEWED assessments count. When an employee has several
    of the same type the most recently completed one is used. Employees
    lacking either side are left out.
    """
    chosen = {}
    for a in assessments or ():
        kind = field(a, "type")
        if kind not in ("SELF", "ASSESSOR") or not is_eligible(a, kind):
            continue
        slot = chosen.setdefault(field(a, "employee_id"), {})
        prev = slot.get(kind)
        if prev is None or _selection_key(a) > _selection_key(prev):
            slot[kind] = a
    pairs = []
    for employee_id, slot in chosen.items():
        if "SELF" in slot and "ASSESSOR" in slot:
            pairs.append((slot["SELF"], slot["ASSESSOR"]))
    return pairs


def merge_ratings(self_ratings, assessor_ratings, lookups=None):
    """Union of both rating sets keyed by competency."""
    lookups = lookups or ConsensusLookups()
    own = {}
    for r in self_ratings or ():
        own[field(r, "competency_id")] = r
    theirs = {}
    for r in assessor_ratings or ():
        theirs[field(r, "competency_id")] = r

    merged = []
    for comp_id, r in own.items():
        value = rating_value(r)
        match = theirs.get(comp_id)
        if match is not None:
            other = rating_value(match)
            consensus = round_rating(Decimal(value + other) / 2)
        else:
            other = None
            consensus = round_rating(value)
        merged.append(ConsensusRating(
            id=field(r, "id"),
            competency_id=comp_id,
            competency_name=lookups.competency_name(comp_id),
            rating=value,
            comments=field(r, "comment") or "",
            assessor_rating=other,
            assessor_comments=(field(match, "comment") or "") if match is not None else "",
            consensus_rating=consensus,
        ))
    for comp_id, r in theirs.items():
        if comp_id in own:
            continue
        value = rating_value(r)
        merged.append(ConsensusRating(
            id=field(r, "id"),
            competency_id=comp_id,
            competency_name=lookups.competency_name(comp_id),
            rating=0,
            comments="",
            assessor_rating=value,
            assessor_comments=field(r, "comment") or "",
            consensus_rating=round_rating(value),
        ))
    return merged


def build_consensus(self_assessment, assessor_assessment, lookups=None) -> Optional[ConsensusView]:
    """Merge a SELF/ASSESSOR pair into a consensus view.

    Returns None when the pair is not eligible (wrong types, different
    employees, or either side not yet COMPLETED/REVIEWED).
    """
    if not is_eligible_pair(self_assessment, assessor_assessment):
        return None
    lookups = lookups or ConsensusLookups()

    merged = merge_ratings(
        field(self_assessment, "ratings"),
        field(assessor_assessment, "ratings"),
        lookups,
    )
    employee_overall = mean_rating([r.rating for r in merged])
    assessor_overall = mean_rating([r.assessor_rating for r in merged if r.assessor_rating is not None])
    consensus_overall = mean_rating([r.consensus_rating for r in merged])

    employee_id = field(self_assessment, "employee_id")
    assessor_id = field(assessor_assessment, "assessor_id")
    job = lookups.job_for(employee_id)
    department = lookups.department_for(job)

    return ConsensusView(
        employee_id=employee_id,
        employee_name=lookups.display_name(employee_id, f"Employee {employee_id}"),
        employee_email=lookups.email(employee_id),
        department_id=field(department, "id") if department is not None else None,
        department_name=(field(department, "name") or NO_DEPARTMENT) if department is not None else NO_DEPARTMENT,
        job_role_id=field(job, "id") if job is not None else None,
        job_role_name=(field(job, "title") or NO_JOB_ROLE) if job is not None else NO_JOB_ROLE,
        assessor_id=assessor_id,
        assessor_name=lookups.display_name(assessor_id, UNKNOWN_ASSESSOR) if assessor_id is not None else UNKNOWN_ASSESSOR,
        self_assessment_id=field(self_assessment, "id"),
        assessor_assessment_id=field(assessor_assessment, "id"),
        start_date=field(self_assessment, "created_at"),
        last_updated=field(assessor_assessment, "completed_at") or field(assessor_assessment, "created_at"),
        competency_ratings=merged,
        employee_rating=employee_overall,
        assessor_rating=assessor_overall,
        consensus_rating=consensus_overall,
    )


def build_consensus_views(assessments, lookups=None):
    views = []
    for self_assessment, assessor_assessment in select_consensus_pairs(assessments):
        view = build_consensus(self_assessment, assessor_assessment, lookups)
        if view is not None:
            views.append(view)
    views.sort(key=lambda v: (v.employee_name.lower(), str(v.employee_id)))
    return views
