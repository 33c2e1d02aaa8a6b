"""Base form for JSON API payloads."""

from flask_wtf import FlaskForm

from swishdrip.errors import ValidationError
from swishdrip.utils.helpers import json_body


def strip_text(value):
    """JSON values may be numbers; text fields always hold stripped strings."""
    if value is None:
        return None
    return str(value).strip()


class ApiForm(FlaskForm):
    """FlaskForm reading from the JSON body; API clients authenticate with bearer tokens."""

    class Meta:
        csrf = False

    def __init__(self, *args, **kwargs):
        # WTForms can only read key/value pairs out of a JSON object
        json_body()
        super().__init__(*args, **kwargs)

    def validate_or_raise(self):
        """Validate the submitted data, raising ValidationError with every message."""
        if not self.validate_on_submit():
            messages = []
            for errors in self.errors.values():
                messages.extend(errors)
            raise ValidationError('; '.join(messages) or 'Invalid request',
                                  payload={'errors': self.errors})
        return self
