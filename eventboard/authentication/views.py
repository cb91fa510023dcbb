# eventboard/authentication/views.py
import re
import json
import secrets
import pytz
from datetime import datetime
from urllib.parse import urlencode
from werkzeug.security import generate_password_hash, check_password_hash
from sqlalchemy.exc import OperationalError
from eventboard.init_db import db
from eventboard.authentication.models import User, MAX_GENRES
from eventboard.errors import (
    MissingField, DuplicateUser, ValidationError, InvalidCredentials, InvalidOrExpiredToken, UserNotFound,
)
from eventboard.logging_config import setup_logging

logger = setup_logging()

HASH_METHOD = 'pbkdf2:sha256'
EMAIL_PATTERN = re.compile(r"[^@]+@[^@]+\.[^@]+")
REQUIRED_REGISTRATION_FIELDS = ('first_name', 'last_name', 'email', 'password')


def utcnow():
    # Naive UTC, matching how DateTime columns round-trip through SQLite
    return datetime.now(pytz.utc).replace(tzinfo=None)


def hash_secret(value):
    return generate_password_hash(value, method=HASH_METHOD)


def normalize_genres(genres):
    """Accept a list or a comma-separated string and keep the first three entries."""
    if not genres:
        return []
    if isinstance(genres, str):
        genres = genres.split(',')
    cleaned = [str(genre).strip() for genre in genres]
    return [genre for genre in cleaned if genre][:MAX_GENRES]


def ensure_text(**fields):
    for name, value in fields.items():
        if not isinstance(value, str):
            raise ValidationError(f"{name} must be a string.")


def find_user_by_email(email):
    if not email:
        return None
    return User.query.filter_by(email=str(email).strip().lower()).first()


def register_user(data):
    missing = [field for field in REQUIRED_REGISTRATION_FIELDS if not data.get(field)]
    if missing:
        raise MissingField(f"Missing required fields: {', '.join(missing)}.")
    ensure_text(**{field: data[field] for field in REQUIRED_REGISTRATION_FIELDS})

    email = str(data['email']).strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError('Invalid email address.')

    if find_user_by_email(email):
        raise DuplicateUser()

    user = User(
        first_name=str(data['first_name']).strip(),
        last_name=str(data['last_name']).strip(),
        email=email,
        password=hash_secret(data['password']),
        user_description=data.get('user_description') or None,
        top_music_genres=normalize_genres(data.get('top_music_genres')),
    )
    db.session.add(user)
    db.session.commit()
    return user


class Authenticator:
    """Checks an email/password pair against the stored password hash."""

    def __init__(self, find_user=find_user_by_email, check_password=check_password_hash):
        self.find_user = find_user
        self.check_password = check_password

    def verify(self, email, password):
        if not email or not password:
            raise MissingField('Email and password are required.')
        ensure_text(email=email, password=password)
        user = self.find_user(email)
        if not user or not self.check_password(user.password, password):
            raise InvalidCredentials()
        return user


def set_logged_in(user, logged_in):
    user.is_logged_in = logged_in
    db.session.commit()


def issue_reset_token(email, ttl):
    """Store a fresh reset token hash for the user and return the raw token.

    Any earlier pending token is overwritten, so only the newest link works.
    """
    if not email:
        raise MissingField('Email is required.')
    ensure_text(email=email)
    user = find_user_by_email(email)
    if not user:
        raise UserNotFound()

    token = secrets.token_hex(20)
    user.reset_token = hash_secret(token)
    user.reset_token_expires = utcnow() + ttl
    db.session.commit()
    return user, token


def build_reset_link(frontend_url, token, email):
    return f"{frontend_url.rstrip('/')}/reset-password/{token}?{urlencode({'email': email})}"


def verify_reset_token(user, token):
    if not user or not user.reset_token or not user.reset_token_expires:
        return False
    if user.reset_token_expires <= utcnow():
        return False
    return check_password_hash(user.reset_token, token)


def clear_reset_token(user):
    user.reset_token = None
    user.reset_token_expires = None


def consume_reset_token(email, token, new_password):
    if not email or not new_password:
        raise MissingField('Email and new password are required.')
    ensure_text(email=email, password=new_password)
    user = find_user_by_email(email)
    if not token or not verify_reset_token(user, token):
        raise InvalidOrExpiredToken()

    user.password = hash_secret(new_password)
    clear_reset_token(user)
    db.session.commit()
    return user


def set_admin_flag(user_id, is_admin):
    if not isinstance(is_admin, bool):
        raise ValidationError('is_admin must be true or false.')
    user = db.session.get(User, user_id)
    if not user:
        raise UserNotFound()
    user.is_admin = is_admin
    db.session.commit()
    return user


def create_admin_users(json_path):
    try:
        # Load admin users details from JSON file
        with open(json_path, 'r') as f:
            admin_data = json.load(f)

        for admin_details in admin_data.get('admins', []):
            email = admin_details['email'].strip().lower()
            admin_user = User.query.filter_by(email=email).first()
            if admin_user is None:
                admin_user = User(
                    first_name=admin_details.get('first_name', 'Admin'),
                    last_name=admin_details.get('last_name', 'User'),
                    email=email,
                    password=hash_secret(admin_details['password']),
                    is_admin=True,
                )
                db.session.add(admin_user)
                logger.info(f"Admin user '{email}' created successfully.")
            else:
                logger.info(f"Admin user '{email}' already exists.")

        db.session.commit()
    except FileNotFoundError:
        logger.warning("Admin user JSON file not found.")
    except (json.JSONDecodeError, KeyError):
        logger.error("Error decoding the admin user JSON file.")
    except OperationalError as e:
        db.session.rollback()
        logger.error(f"OperationalError when creating admin users: {e}")
