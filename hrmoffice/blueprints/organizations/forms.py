from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import Email, Length, Optional


class OrganizationForm(FlaskForm):
    name = StringField("Name", validators=[Optional(), Length(max=255)])
    email = StringField("Email", validators=[Optional(), Email()])
    logo_url = StringField("Logo URL", validators=[Optional(), Length(max=1024)])
    address = StringField("Address", validators=[Optional()])
