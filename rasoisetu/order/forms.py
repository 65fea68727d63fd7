"""Forms for the direct order blueprint."""

from flask_wtf import FlaskForm
from wtforms import SelectField
from wtforms.validators import DataRequired

from rasoisetu.core.constants import ORDER_STATUSES


class OrderStatusForm(FlaskForm):
    """Form for a supplier to move an order through its workflow."""

    status = SelectField(
        "Status", choices=list(ORDER_STATUSES), validators=[DataRequired()]
    )
