# backend/routes/auth.py
from flask import Blueprint, request, jsonify, session, current_app
from flask_login import login_user, login_required
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from sqlalchemy.exc import IntegrityError
from datetime import datetime, timezone
import logging

from models import db, User, utcnow
from middleware.auth import with_auth_context
from routes.common import get_json_body, validate_email

auth_bp = Blueprint('auth', __name__)
logger = logging.getLogger(__name__)

CONFIRMATION_SALT = 'email-confirmation'
PENDING_CONFIRMATION_MESSAGE = 'Check your email to confirm your account.'


def create_error_response(message, status_code=400):
    """Auth errors are shown verbatim under the login/signup form"""
    return jsonify({
        'error': message,
        'status_code': status_code,
        'timestamp': datetime.now(timezone.utc).isoformat()
    }), status_code


def _serializer():
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=CONFIRMATION_SALT)


def generate_confirmation_token(user):
    return _serializer().dumps({'user_id': user.id, 'email': user.email})


def _read_credentials():
    data = get_json_body()
    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''
    if not email or not password:
        raise ValueError('Email and password are required')
    return email, password


def _start_session(user):
    user.last_login = utcnow()
    db.session.commit()
    login_user(user, remember=True)
    session.permanent = True


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """Create an account; signs in immediately unless email confirmation is on"""
    try:
        email, password = _read_credentials()
        validate_email(email)
        min_length = current_app.config.get('PASSWORD_MIN_LENGTH', 6)
        if len(password) < min_length:
            raise ValueError(f'Password should be at least {min_length} characters')
    except ValueError as e:
        logger.warning(f"Signup validation failed: {e}")
        return create_error_response(str(e), 400)

    if User.query.filter_by(email=email).first():
        logger.warning(f"Signup rejected: '{email}' is already registered")
        return create_error_response('User already registered', 400)

    require_confirmation = current_app.config.get('AUTH_REQUIRE_EMAIL_CONFIRMATION', False)

    try:
        user = User(email=email, email_confirmed=not require_confirmation)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return create_error_response('User already registered', 400)
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating user '{email}': {str(e)}")
        return create_error_response('Signup failed due to server error', 500)

    logger.info(f"Created user '{email}' (ID: {user.id})")

    if require_confirmation:
        token = generate_confirmation_token(user)
        # Delivery is handled outside this service; the token is logged for it
        logger.info(f"Confirmation token issued for '{email}': {token}")
        return jsonify({
            'status': 'pending_confirmation',
            'message': PENDING_CONFIRMATION_MESSAGE,
            'user': None
        }), 201

    _start_session(user)
    return jsonify({
        'status': 'signed_in',
        'message': 'Signup successful',
        'user': user.to_dict()
    }), 201


@auth_bp.route('/confirm/<token>', methods=['GET'])
def confirm_email(token):
    """Mark an account confirmed from a signed token"""
    max_age = current_app.config.get('EMAIL_CONFIRMATION_MAX_AGE')
    try:
        payload = _serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        return create_error_response('Confirmation link has expired', 400)
    except BadSignature:
        return create_error_response('Invalid confirmation link', 400)

    user = db.session.get(User, payload.get('user_id'))
    if user is None or user.email != payload.get('email'):
        return create_error_response('Invalid confirmation link', 400)

    if not user.email_confirmed:
        user.email_confirmed = True
        db.session.commit()
        logger.info(f"Email confirmed for user '{user.email}'")

    return jsonify({'message': 'Email confirmed', 'user': user.to_dict()}), 200


@auth_bp.route('/login', methods=['POST'])
def login():
    """Sign in with email and password"""
    try:
        email, password = _read_credentials()
    except ValueError as e:
        return create_error_response(str(e), 400)

    logger.info(f"Login attempt for '{email}' from {request.remote_addr}")

    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        logger.warning(f"Login failed for '{email}': invalid credentials")
        return create_error_response('Invalid login credentials', 401)

    if not user.is_active:
        logger.warning(f"Login failed: user '{email}' is inactive")
        return create_error_response('Account is disabled', 401)

    if not user.email_confirmed:
        logger.warning(f"Login failed: user '{email}' has not confirmed their email")
        return create_error_response('Email not confirmed', 401)

    try:
        _start_session(user)
    except Exception as e:
        db.session.rollback()
        logger.error(f"Session creation failed for '{email}': {str(e)}")
        return create_error_response('Login failed due to server error', 500)

    logger.info(f"Login successful for '{email}' (ID: {user.id})")
    return jsonify({
        'message': 'Login successful',
        'user': user.to_dict()
    }), 200


@auth_bp.route('/logout', methods=['POST'])
@with_auth_context
def logout(auth):
    """Sign out; always succeeds"""
    was_authenticated = auth.is_authenticated
    # clear first so logout_user can still flag the remember cookie for removal
    session.clear()
    auth.invalidate()
    return jsonify({
        'message': 'Logout successful',
        'success': True,
        'was_authenticated': was_authenticated
    }), 200


@auth_bp.route('/me', methods=['GET'])
@login_required
@with_auth_context
def get_current_user(auth):
    """Session state for the client's auth context"""
    return jsonify(auth.to_dict()), 200


@auth_bp.route('/session', methods=['GET'])
@with_auth_context
def get_session(auth):
    """Like /me but answers 200 for signed-out visitors too"""
    return jsonify(auth.to_dict()), 200
