"""Checkout and order forms."""

from wtforms import StringField
from wtforms.validators import DataRequired, Length, Optional
from swishdrip.forms.base import ApiForm, strip_text


class CheckoutForm(ApiForm):
    """Customer contact fields; the item list is validated by the checkout service."""
    customerName = StringField('customerName', filters=[strip_text], validators=[
        DataRequired(message='customerName is required'),
        Length(max=100)
    ])
    phone = StringField('phone', filters=[strip_text], validators=[
        DataRequired(message='phone is required'),
        Length(max=20)
    ])
    location = StringField('location', filters=[strip_text], validators=[
        DataRequired(message='location is required'),
        Length(max=500)
    ])


class CancelOrderForm(ApiForm):
    reason = StringField('reason', filters=[strip_text], validators=[
        Optional(),
        Length(max=500)
    ])
