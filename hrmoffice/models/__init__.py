from .organization import Organization
from .user import User
from .department import Department
from .competency import CompetencyDomain, CompetencyCategory, Competency, ProficiencyLevel
from .job import Job, JobCompetency
from .employee_job_assignment import EmployeeJobAssignment
from .assessor_assignment import AssessorAssignment
from .assessment import Assessment, AssessmentRating
from .notification import Notification
from .appraisal import AppraisalQuestion, Appraisal, AppraisalResponse
from .standard import Standard
# base and mixins are imported by the above as needed
