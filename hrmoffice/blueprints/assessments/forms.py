from flask_wtf import FlaskForm
from wtforms import IntegerField, StringField
from wtforms.validators import AnyOf, DataRequired, InputRequired, Optional
from ...models.assessment import ASSESSMENT_STATUSES


class AssessorAssessmentForm(FlaskForm):
    employee_id = IntegerField("Employee", validators=[InputRequired()])


class StatusForm(FlaskForm):
    status = StringField("Status", validators=[DataRequired(), AnyOf(ASSESSMENT_STATUSES)])


class RatingForm(FlaskForm):
    competency_id = IntegerField("Competency", validators=[InputRequired()])
    # the 0..5 rating is checked in the view; InputRequired treats 0 as missing
    comment = StringField("Comment", validators=[Optional()])
