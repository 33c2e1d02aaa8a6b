"""Authentication routes."""

from flask import Blueprint, jsonify, current_app
from flask_login import login_required, current_user
from swishdrip.forms.auth import LoginForm, RegistrationForm, ProfileForm, ChangePasswordForm
from swishdrip.services import accounts

auth_bp = Blueprint('auth', __name__)


def _session_payload(user):
    return {
        'success': True,
        'token': accounts.issue_token(user),
        'user': user.to_dict(),
    }


@auth_bp.route('/register', methods=['POST'])
def register():
    """Customer registration."""
    form = RegistrationForm().validate_or_raise()
    user = accounts.register_user(
        email=form.email.data,
        password=form.password.data,
        name=form.name.data,
        phone=form.phone.data
    )
    return jsonify(_session_payload(user)), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """User login."""
    form = LoginForm().validate_or_raise()
    user = accounts.authenticate(form.email.data, form.password.data)
    current_app.logger.info('User %s logged in', user.email)
    return jsonify(_session_payload(user))


@auth_bp.route('/me')
@login_required
def me():
    """Current user."""
    return jsonify({'success': True, 'user': current_user.to_dict()})


@auth_bp.route('/profile', methods=['PUT'])
@login_required
def update_profile():
    """Update name and phone."""
    form = ProfileForm().validate_or_raise()
    user = accounts.update_profile(current_user, name=form.name.data, phone=form.phone.data)
    return jsonify({'success': True, 'user': user.to_dict()})


@auth_bp.route('/change-password', methods=['POST'])
@login_required
def change_password():
    """Change password; the current one must be supplied."""
    form = ChangePasswordForm().validate_or_raise()
    accounts.change_password(current_user, form.currentPassword.data, form.newPassword.data)
    return jsonify({'success': True, 'message': 'Password updated successfully'})


@auth_bp.route('/account', methods=['DELETE'])
@login_required
def delete_account():
    """Deactivate the current account."""
    accounts.deactivate_account(current_user)
    return jsonify({'success': True, 'message': 'Account deleted successfully'})
