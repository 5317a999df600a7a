from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, SelectField
from wtforms.validators import DataRequired, Email, Length, Optional, Regexp

from ...models.user import ROLES


class OrgSignupForm(FlaskForm):
    organization_name = StringField("Organization name", validators=[DataRequired(), Length(max=255)])
    organization_email = StringField("Organization email", validators=[DataRequired(), Email()])
    slug = StringField("Slug", validators=[DataRequired(), Length(max=120), Regexp(r"^[a-z0-9][a-z0-9-]*$", message="lowercase letters, digits and dashes only")])
    admin_email = StringField("Admin email", validators=[DataRequired(), Email()])
    admin_password = PasswordField("Admin password", validators=[DataRequired(), Length(min=8)])
    first_name = StringField("First name", validators=[Optional(), Length(max=120)])
    last_name = StringField("Last name", validators=[Optional(), Length(max=120)])
    logo_url = StringField("Logo URL", validators=[Optional(), Length(max=1024)])
    address = StringField("Address", validators=[Optional()])


class LoginForm(FlaskForm):
    slug = StringField("Organization", validators=[DataRequired()])
    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired()])


class UserSignupForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired(), Length(min=8)])
    first_name = StringField("First name", validators=[DataRequired(), Length(max=120)])
    last_name = StringField("Last name", validators=[DataRequired(), Length(max=120)])
    role = SelectField("Role", choices=[(r, r) for r in ROLES], validators=[DataRequired()])
