# eventboard/authentication/routes.py
from flask import Blueprint, jsonify, session, current_app
from flask_login import login_user, login_required, logout_user, current_user
from eventboard.init_db import db
from eventboard.logging_config import setup_logging
from eventboard.decorators import admin_required
from eventboard.helpers import request_data, form_bool
from eventboard.errors import ApiError, InternalError
from eventboard.mailer import MailerError
from eventboard.authentication.models import User
from eventboard.authentication.sessions import SESSION_KEY
from eventboard.authentication.views import (
    register_user, set_logged_in, issue_reset_token, build_reset_link, consume_reset_token, set_admin_flag,
)


auth_bp = Blueprint('auth', __name__)
# Setup logging
logger = setup_logging()


def service(name):
    return current_app.extensions[name]


@auth_bp.route('/register', methods=['POST'])
def register():
    try:
        user = register_user(request_data())
        logger.info(f"New user {user.email} registered successfully.")
        return jsonify({'user': user.to_dict(), 'message': 'User created successfully'}), 201

    except ApiError as e:
        logger.warning(f"Registration rejected: {e.message}")
        raise
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error during registration: {e}")
        raise InternalError('An error occurred during registration.') from e


@auth_bp.route('/session', methods=['GET'])
def get_session():
    if current_user.is_authenticated:
        return jsonify({'isLoggedIn': True, 'user': current_user.to_dict()}), 200
    return jsonify({'isLoggedIn': False}), 200


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request_data()
    email = data.get('email')
    try:
        user = service('authenticator').verify(email, data.get('password'))

        # Fresh session id and cookie contents on every login
        service('session_store').destroy(session.get(SESSION_KEY))
        session.clear()
        session[SESSION_KEY] = service('session_store').create(user)
        login_user(user)
        set_logged_in(user, True)

        logger.info(f"User {user.email} logged in successfully.")
        return jsonify({'user': user.to_dict(), 'message': 'Login successful!'}), 200

    except ApiError:
        logger.warning(f"Failed login attempt for email: {email}")
        raise
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error during login: {e}")
        raise InternalError('An error occurred during login.') from e


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    try:
        email = current_user.email
        set_logged_in(current_user, False)
        service('session_store').destroy(session.get(SESSION_KEY))
        logout_user()
        # An emptied session makes Flask expire the cookie on the response
        session.clear()

        logger.info(f"User {email} logged out successfully.")
        return jsonify({'message': 'Logout successful!'}), 200

    except Exception as e:
        db.session.rollback()
        logger.error(f"Error during logout: {e}")
        raise InternalError('An error occurred during logout.') from e


@auth_bp.route('/users', methods=['GET'])
@login_required
@admin_required
def list_users():
    try:
        users = User.query.order_by(User.id).all()
        logger.info(f"Admin {current_user.email} listed all users.")
        return jsonify([user.to_dict() for user in users]), 200

    except Exception as e:
        logger.error(f"Error listing users: {e}")
        raise InternalError('An error occurred while listing users.') from e


@auth_bp.route('/setAdmin/<int:user_id>', methods=['PATCH'])
@login_required
@admin_required
def set_admin(user_id):
    try:
        user = set_admin_flag(user_id, form_bool(request_data().get('is_admin')))
        logger.info(f"Admin {current_user.email} set is_admin={user.is_admin} for user {user.id}.")
        return jsonify({'user': user.to_dict(), 'message': 'Admin status updated.'}), 200

    except ApiError:
        raise
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating admin status: {e}")
        raise InternalError('An error occurred while updating admin status.') from e


@auth_bp.route('/forgot-password', methods=['POST'])
def forgot_password():
    try:
        user, token = issue_reset_token(request_data().get('email'), current_app.config['RESET_TOKEN_TTL'])
        reset_link = build_reset_link(current_app.config['FRONTEND_URL'], token, user.email)
        service('mailer').send_password_reset(user, reset_link)

        logger.info(f"Password reset requested for {user.email}.")
        return jsonify({'message': 'Password reset link sent to your email address.'}), 200

    except ApiError as e:
        logger.warning(f"Password reset request rejected: {e.message}")
        raise
    except MailerError as e:
        logger.error(f"Failed to send password reset email: {e}")
        raise InternalError('Failed to send password reset email.') from e
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error during password reset request: {e}")
        raise InternalError('An error occurred while requesting a password reset.') from e


@auth_bp.route('/reset-password/<token>', methods=['POST'])
def reset_password(token):
    data = request_data()
    try:
        user = consume_reset_token(data.get('email'), token, data.get('password'))

        logger.info(f"Password reset completed for {user.email}.")
        return jsonify({'message': 'Password reset successfully.'}), 200

    except ApiError as e:
        logger.warning(f"Password reset rejected: {e.message}")
        raise
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error during password reset: {e}")
        raise InternalError('An error occurred while resetting the password.') from e
