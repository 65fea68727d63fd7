"""Forms for the group order blueprint."""

from flask_wtf import FlaskForm
from wtforms import DateTimeLocalField, FloatField, IntegerField, SelectField, StringField
from wtforms.validators import DataRequired, InputRequired, NumberRange, Optional

from rasoisetu.core.constants import CATEGORIES, GROUP_ORDER_MIN_VENDORS, UNITS

DEADLINE_FORMATS = [
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
]


class GroupOrderForm(FlaskForm):
    """Form for creating a new group order."""

    item_name = StringField("Item Name", validators=[DataRequired()])
    category = SelectField(
        "Category", choices=list(CATEGORIES), validators=[DataRequired()]
    )
    target_price = FloatField(
        "Target Price", validators=[InputRequired(), NumberRange(min=0.01)]
    )
    unit = SelectField("Unit", choices=list(UNITS), validators=[DataRequired()])
    min_vendors = IntegerField(
        "Minimum Vendors",
        validators=[InputRequired(), NumberRange(min=GROUP_ORDER_MIN_VENDORS)],
    )
    deadline = DateTimeLocalField(
        "Deadline", format=DEADLINE_FORMATS, validators=[InputRequired()]
    )


class JoinGroupOrderForm(FlaskForm):
    """Form for joining a group order or changing the requested quantity."""

    quantity = IntegerField(
        "Quantity", default=1, validators=[Optional(), NumberRange(min=1)]
    )
