import re
import logging
from datetime import datetime, timedelta

from flask import Blueprint, request, jsonify
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    jwt_required,
    get_jwt_identity,
    get_jwt,
)

from ayurclinic.extensions import db
from ayurclinic.models import User, PatientProfile, Role
from ayurclinic.repositories import ClinicStore
from ayurclinic.utils.audit import log_audit

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
MIN_PASSWORD_LENGTH = 6


def _token_claims(user):
    return {
        "email": user.email,
        "role": user.role.value,
    }


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """
    Patient self sign-up.
    Body: { name, email, phone, password, confirm_password }
    """
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'success': False, 'error': 'Request body must be JSON'}), 400

    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''
    confirm_password = data.get('confirm_password')
    phone = (data.get('phone') or '').strip()

    if not email or not password:
        return jsonify({'success': False, 'error': 'Email and password required'}), 400
    if not EMAIL_RE.match(email):
        return jsonify({'success': False, 'error': 'Invalid email format.'}), 400
    if confirm_password is not None and password != confirm_password:
        return jsonify({'success': False, 'error': 'Passwords do not match'}), 400
    if len(password) < MIN_PASSWORD_LENGTH:
        return jsonify({'success': False, 'error': 'Password should be at least 6 characters'}), 400

    store = ClinicStore()
    if store.get_user_by_email(email):
        return jsonify({'success': False, 'error': 'This email is already registered.'}), 400

    name = (data.get('name') or '').strip() or email.split('@')[0]

    user = User(email=email, name=name, phone=phone, role=Role.PATIENT, is_active=True)
    user.set_password(password)
    db.session.add(user)
    db.session.flush()

    db.session.add(PatientProfile(user_id=user.id, name=name, email=email, phone=phone))
    db.session.commit()

    logger.info("Patient account created: %s", email)
    log_audit("user", "signup", user_id=user.id, entity_id=user.id, details={"role": "patient"})

    return jsonify({
        'success': True,
        'message': 'Account created successfully! Please login.',
        'data': user.to_dict(),
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Login with email, password and the role the user picked.
    A correct password with the wrong role is refused.
    """
    data = request.get_json(silent=True)

    if not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    email = (data.get('email') or '').strip()
    password = data.get('password')
    selected_role = (data.get('role') or '').strip().lower()

    if not selected_role:
        return jsonify({
            'success': False,
            'error': 'Please select your role'
        }), 400

    if not email or not password:
        return jsonify({
            'success': False,
            'error': 'Email and password required'
        }), 400

    user = ClinicStore().get_user_by_email(email)

    if not user or not user.check_password(password):
        return jsonify({
            'success': False,
            'error': 'Invalid email or password.'
        }), 401

    if not user.is_active:
        return jsonify({
            'success': False,
            'error': 'Account is deactivated'
        }), 403

    if user.role.value != selected_role:
        return jsonify({
            'success': False,
            'error': f'This account is registered as {user.role.value}. Please select the correct role.'
        }), 403

    # Update login tracking
    user.last_login = datetime.utcnow()
    user.login_count = (user.login_count or 0) + 1
    db.session.commit()

    identity = str(user.id)
    claims = _token_claims(user)

    access_token = create_access_token(
        identity=identity,
        additional_claims=claims,
        fresh=True,
        expires_delta=timedelta(hours=1)
    )
    refresh_token = create_refresh_token(
        identity=identity,
        additional_claims=claims,
    )

    return jsonify({
        'success': True,
        'data': user.to_dict(),
        'redirect': f'/{user.role.value}',
        'access_token': access_token,
        'refresh_token': refresh_token,
        'token_type': 'bearer',
        'expires_in': 3600
    }), 200


@auth_bp.route('/logout', methods=['POST'])
@jwt_required()
def logout():
    """Stateless JWT: the client deletes its tokens."""
    return jsonify({
        'success': True,
        'message': 'Logged out successfully (delete tokens on client)'
    }), 200


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def get_current_user():
    """Restore the signed-in user from the access token."""
    user = ClinicStore().get_user(int(get_jwt_identity()))

    if not user:
        return jsonify({'success': False, 'error': 'User not found'}), 404

    data = user.to_dict()
    if user.role == Role.PATIENT and user.patient_profile:
        data['profile'] = user.patient_profile.to_dict()
    return jsonify({'success': True, 'data': data}), 200


@auth_bp.route('/refresh', methods=['POST'])
@jwt_required(refresh=True)
def refresh():
    """Refresh access token using refresh token"""
    identity = get_jwt_identity()
    claims = get_jwt()
    new_access_token = create_access_token(
        identity=identity,
        additional_claims={
            "email": claims.get("email"),
            "role": claims.get("role"),
        },
        fresh=False
    )
    return jsonify({
        'success': True,
        'access_token': new_access_token,
        'token_type': 'bearer',
        'expires_in': 3600
    }), 200
