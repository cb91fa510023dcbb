# eventboard/config.py
import os
import binascii
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.environ.get('SESSION_SECRET') or binascii.hexlify(os.urandom(24)).decode()

    BASE_DIR = os.path.abspath(os.path.dirname(__file__))

    DATABASE_PATH = os.path.join(BASE_DIR, 'flask_data.db')

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', f'sqlite:///{DATABASE_PATH}')

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    ADMIN_USERS_PATH = os.environ.get('ADMIN_USERS_PATH', os.path.join(BASE_DIR, 'admin_user.json'))
    EMAIL_CONFIG_PATH = os.environ.get('EMAIL_CONFIG_PATH', os.path.join(BASE_DIR, 'email_config.json'))

    FRONTEND_URL = os.environ.get('FRONTEND_URL', 'http://localhost:3000')
    RESET_TOKEN_TTL = timedelta(hours=1)

    LOG_TIMEZONE = os.environ.get('LOG_TIMEZONE', 'UTC')
    PORT = int(os.environ.get('PORT', 3000))
