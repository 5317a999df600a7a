from flask_wtf import FlaskForm
from wtforms import IntegerField, StringField
from wtforms.validators import InputRequired, Optional


class JobAssignmentForm(FlaskForm):
    employee_id = IntegerField("Employee", validators=[InputRequired()])
    job_id = IntegerField("Job", validators=[InputRequired()])
    # ISO date or datetime; parsed in the view
    start_date = StringField("Start date", validators=[Optional()])


class JobAssignmentUpdateForm(FlaskForm):
    employee_id = IntegerField("Employee", validators=[Optional()])
    job_id = IntegerField("Job", validators=[Optional()])
    start_date = StringField("Start date", validators=[Optional()])
