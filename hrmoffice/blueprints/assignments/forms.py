from flask_wtf import FlaskForm
from wtforms import IntegerField
from wtforms.validators import InputRequired, Optional


class AssignmentForm(FlaskForm):
    assessor_id = IntegerField("Assessor", validators=[InputRequired()])
    employee_id = IntegerField("Employee", validators=[InputRequired()])


class AssignmentUpdateForm(FlaskForm):
    assessor_id = IntegerField("Assessor", validators=[Optional()])
    employee_id = IntegerField("Employee", validators=[Optional()])
