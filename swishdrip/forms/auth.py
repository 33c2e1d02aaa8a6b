"""Authentication forms."""

from wtforms import StringField, PasswordField
from wtforms.validators import DataRequired, Email, Length, Optional, ValidationError
from swishdrip.forms.base import ApiForm, strip_text
from swishdrip.models import User


class LoginForm(ApiForm):
    """Login form."""
    email = StringField('Email', filters=[strip_text], validators=[
        DataRequired(message='Email is required'),
        Email(message='Please enter a valid email address')
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])


class RegistrationForm(ApiForm):
    """Customer registration form."""
    name = StringField('Full Name', filters=[strip_text], validators=[
        Optional(),
        Length(max=100, message='Name must be at most 100 characters')
    ])
    email = StringField('Email', filters=[strip_text], validators=[
        DataRequired(message='Email is required'),
        Email(message='Please enter a valid email address')
    ])
    phone = StringField('Phone Number', filters=[strip_text], validators=[
        Optional(),
        Length(min=7, max=20, message='Please enter a valid phone number')
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required'),
        Length(min=6, message='Password must be at least 6 characters')
    ])

    def validate_email(self, field):
        """Check if email already exists."""
        if User.query.filter_by(email=field.data.strip().lower()).first():
            raise ValidationError('This email is already registered.')


class ProfileForm(ApiForm):
    """Profile update form."""
    name = StringField('Full Name', filters=[strip_text], validators=[
        Optional(),
        Length(max=100)
    ])
    phone = StringField('Phone Number', filters=[strip_text], validators=[
        Optional(),
        Length(min=7, max=20, message='Please enter a valid phone number')
    ])


class ChangePasswordForm(ApiForm):
    """Password change form."""
    currentPassword = PasswordField('Current Password', validators=[
        DataRequired(message='Current password is required')
    ])
    newPassword = PasswordField('New Password', validators=[
        DataRequired(message='New password is required'),
        Length(min=6, message='Password must be at least 6 characters')
    ])
