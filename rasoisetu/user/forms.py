"""Forms for the user blueprint."""

from flask_wtf import FlaskForm
from wtforms import SelectField, StringField
from wtforms.validators import DataRequired, Email, Length, Optional

from rasoisetu.core.constants import DEFAULT_LANGUAGE, ROLES


class ProfileForm(FlaskForm):
    """Form for completing a user profile after sign-up."""

    email = StringField("Email", validators=[DataRequired(), Email()])
    role = SelectField("Role", choices=list(ROLES), validators=[DataRequired()])
    language = StringField(
        "Language", default=DEFAULT_LANGUAGE, validators=[Optional(), Length(max=8)]
    )


class SupplierProfileForm(FlaskForm):
    """Form for updating a supplier's store details."""

    store_name = StringField("Store Name", validators=[DataRequired()])
    location = StringField("Location", validators=[DataRequired()])
    phone = StringField("Phone", validators=[Optional(), Length(max=20)])
    address = StringField("Address", validators=[Optional()])
