"""Performance appraisal questionnaire and scoring."""
import re

from .ratings import compute_overall, field

# (title, how to measure, good indicator, red flag, rating criteria)
DEFAULT_QUESTIONS = (
    ("COMPETENCY MATCH", "Job analysis vs. resume and actual duties",
     "Job matches skills and qualifications", "Mismatch between tasks and core skills",
     "5 = Full match, 3 = Partial, 1 = Misaligned"),
    ("ALIGNED KPIs", "KPI documentation alignment with JD",
     "KPIs directly reflect job duties", "Irrelevant or misaligned KPIs",
     "5 = Full match, 3 = Partial, 1 = Misaligned"),
    ("ROLE UNDERSTANDING", "Supervision required, task completion logs",
     "Executes with autonomy", "Constant need for supervision",
     "5 = Independent, 3 = Moderate guidance, 1 = Frequent hand-holding"),
    ("SUPERVISOR FEEDBACK", "Quarterly feedback score",
     "Consistently positive evaluations", "Supervisor flags gaps repeatedly",
     "5 = Consistently positive, 3 = Mixed, 1 = Poor"),
    ("EXPECTATION MATCH", "Number of escalations for clarity",
     "Minimal clarification needed", "Often confused about expectations",
     "5 = Rarely, 3 = Occasionally, 1 = Frequently"),
    ("STRENGTH UTILIZATION", "% of tasks in strength zone",
     "Uses core strengths frequently", "Working outside comfort zone often",
     "5 = >80%, 3 = 50-79%, 1 = <50%"),
    ("HIRING PURPOSE ALIGNMENT", "Role change audit vs. original offer",
     "Still aligned with hiring goals", "Role drift without review or fit",
     "5 = Consistent, 3 = Some shift, 1 = Major drift"),
    ("REDEPLOYMENT UNNECESSARY", "Redeployment request frequency",
     "Well-placed and stable", "Redeployment actively considered",
     "5 = Never, 3 = Discussed, 1 = Recommended"),
    ("ONGOING LEARNING", "Number of completed role-relevant courses",
     "Recent relevant training", "No learning undertaken recently",
     "5 = 2 or more, 3 = 1, 1 = None"),
    ("ERROR RATE", "% of deliverables needing rework",
     "Low correction/rework levels", "Frequent errors or rework",
     "5 = <10%, 3 = 10-20%, 1 = >20%"),
    ("TIMELINES", "% of tasks delivered on or before due date",
     "Consistently meets deadlines", "Regular delays or deadline extensions",
     "5 = 95% or more, 3 = 80-94%, 1 = <80%"),
    ("TOOL UTILIZATION", "Tech/tool usage rate",
     "Uses tools to optimize work", "Resists adopting helpful technologies",
     "5 = High usage, 3 = Moderate, 1 = Avoids tools"),
    ("PROCESS OPTIMIZATION", "Number of suggestions implemented",
     "Improves or streamlines work", "Makes no process improvement effort",
     "5 = 3 or more per quarter, 3 = 1-2, 1 = None"),
    ("CONTINUOUS IMPROVEMENT", "Courses/programs in 6 months",
     "Participates in learning initiatives", "No recent development participation",
     "5 = 2 or more, 3 = 1, 1 = None"),
    ("TIME MANAGEMENT", "Idle time report",
     "High productivity per time", "Extended idle periods or poor focus",
     "5 = <10%, 3 = 10-20%, 1 = >20%"),
    ("MINIMAL REWORK", "Supervisor corrections per task",
     "Work needs no revisions", "Work often requires corrections",
     "5 = Rarely, 3 = Sometimes, 1 = Frequently"),
    ("FLEXIBILITY", "Response time to change",
     "Adapts well to change", "Struggles with unexpected change",
     "5 = Immediate, 3 = Delayed, 1 = Resists"),
    ("URGENCY AWARENESS", "Time-sensitive task success rate",
     "Responds with urgency as needed", "Delays critical responses or actions",
     "5 = Always meets, 3 = Mixed, 1 = Misses"),
    ("PRODUCTIVITY", "Output vs. time spent",
     "High output with efficient time use", "Low output despite time spent",
     "5 = Excellent, 4 = Good, 3 = Average, 2 = Below Average, 1 = Poor"),
    ("PROFIT IMPACT", "Contribution to revenue/cost savings",
     "Positive impact on profitability", "Negative or no impact on profitability",
     "5 = Excellent, 4 = Good, 3 = Average, 2 = Below Average, 1 = Poor"),
)


def question_key(title):
    return re.sub(r"\s+", "_", title.strip().lower())


def default_question_rows():
    """Default questionnaire as column dicts, numbered from 1."""
    rows = []
    for position, (title, measure, good, red, criteria) in enumerate(DEFAULT_QUESTIONS, start=1):
        rows.append({
            "key": question_key(title),
            "title": title,
            "how_to_measure": measure,
            "good_indicator": f"Good Indicator: {good}",
            "red_flag": f"Red Flag: {red}",
            "rating_criteria": criteria,
            "position": position,
        })
    return rows


def appraisal_scores(responses):
    """Overall employee and assessor score of an appraisal's responses; unrated answers are skipped."""
    responses = list(responses or ())
    return {
        "employee_rating": float(compute_overall({"rating": field(r, "employee_rating")} for r in responses)),
        "assessor_rating": float(compute_overall({"rating": field(r, "assessor_rating")} for r in responses)),
    }
