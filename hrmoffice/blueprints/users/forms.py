from flask_wtf import FlaskForm
from wtforms import StringField, SelectField
from wtforms.validators import DataRequired, Length, Optional

from ...models.user import ROLES


class ProfileForm(FlaskForm):
    first_name = StringField("First name", validators=[Optional(), Length(max=120)])
    last_name = StringField("Last name", validators=[Optional(), Length(max=120)])
    phone = StringField("Phone", validators=[Optional(), Length(max=50)])
    profile_picture_url = StringField("Profile picture", validators=[Optional(), Length(max=1024)])


class RoleForm(FlaskForm):
    role = SelectField("Role", choices=[(r, r) for r in ROLES], validators=[DataRequired()])
