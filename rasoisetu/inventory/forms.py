"""Forms for the inventory blueprint."""

from flask_wtf import FlaskForm
from wtforms import FloatField, IntegerField, SelectField, StringField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, NumberRange, Optional

from rasoisetu.core.constants import CATEGORIES, UNITS


class InventoryItemForm(FlaskForm):
    """Form for adding an inventory item."""

    name = StringField("Item Name", validators=[DataRequired()])
    category = SelectField(
        "Category", choices=list(CATEGORIES), validators=[DataRequired()]
    )
    price = FloatField("Price", validators=[InputRequired(), NumberRange(min=0.01)])
    unit = SelectField("Unit", choices=list(UNITS), validators=[DataRequired()])
    stock = IntegerField(
        "Stock Quantity", validators=[InputRequired(), NumberRange(min=0)]
    )
    description = TextAreaField("Description", validators=[Optional()])


class EditInventoryItemForm(FlaskForm):
    """Form for changing some fields of an inventory item."""

    name = StringField("Item Name", validators=[Optional()])
    category = SelectField(
        "Category", choices=list(CATEGORIES), validators=[Optional()]
    )
    price = FloatField("Price", validators=[Optional(), NumberRange(min=0.01)])
    unit = SelectField("Unit", choices=list(UNITS), validators=[Optional()])
    stock = IntegerField("Stock Quantity", validators=[Optional(), NumberRange(min=0)])
    description = TextAreaField("Description", validators=[Optional()])

    def changed_fields(self):
        """Return only the fields the client actually sent."""
        updates = {}
        for name in ("name", "category", "price", "unit", "stock", "description"):
            field = getattr(self, name)
            if field.raw_data:
                updates[name] = field.data
        return updates
