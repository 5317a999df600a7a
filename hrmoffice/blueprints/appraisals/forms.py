from flask_wtf import FlaskForm
from wtforms import IntegerField, StringField
from wtforms.validators import AnyOf, DataRequired, InputRequired, Optional
from ...models.appraisal import APPRAISAL_STATUSES


class AssessorAppraisalForm(FlaskForm):
    employee_id = IntegerField("Employee", validators=[InputRequired()])


class StatusForm(FlaskForm):
    status = StringField("Status", validators=[DataRequired(), AnyOf(APPRAISAL_STATUSES)])


class ResponseForm(FlaskForm):
    question_id = IntegerField("Question", validators=[InputRequired()])
    comment = StringField("Comment", validators=[Optional()])
