from flask_wtf import FlaskForm
from wtforms import StringField, IntegerField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional


class DomainForm(FlaskForm):
    domain_name = StringField("Domain", validators=[DataRequired(), Length(max=255)])


class CategoryForm(FlaskForm):
    name = StringField("Name", validators=[DataRequired(), Length(max=255)])
    domain_id = IntegerField("Domain", validators=[InputRequired()])


class CompetencyForm(FlaskForm):
    name = StringField("Name", validators=[DataRequired(), Length(max=255)])
    description = TextAreaField("Description", validators=[Optional()])
    category_id = IntegerField("Category", validators=[InputRequired()])


class LevelForm(FlaskForm):
    level_number = IntegerField("Level", validators=[InputRequired(), NumberRange(min=1, max=5)])
    label = StringField("Label", validators=[DataRequired(), Length(max=120)])
    description = TextAreaField("Description", validators=[Optional()])


class StandardForm(FlaskForm):
    name = StringField("Name", validators=[DataRequired(), Length(max=255)])
    domain_id = IntegerField("Domain", validators=[InputRequired()])
    definition = TextAreaField("Definition", validators=[DataRequired()])
