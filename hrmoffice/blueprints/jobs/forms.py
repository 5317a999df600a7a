from flask_wtf import FlaskForm
from wtforms import StringField, IntegerField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional


class JobForm(FlaskForm):
    title = StringField("Title", validators=[DataRequired(), Length(max=255)])
    description = TextAreaField("Description", validators=[Optional()])
    department_id = IntegerField("Department", validators=[Optional()])


class RequirementForm(FlaskForm):
    competency_id = IntegerField("Competency", validators=[InputRequired()])
    required_level = IntegerField("Required level", validators=[InputRequired(), NumberRange(min=1, max=5)])


class RequirementUpdateForm(FlaskForm):
    competency_id = IntegerField("Competency", validators=[Optional()])
    required_level = IntegerField("Required level", validators=[Optional(), NumberRange(min=1, max=5)])
