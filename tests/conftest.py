from datetime import timedelta

import pytest

from eventboard.app_factory import create_app
from eventboard.init_db import db
from eventboard.authentication.models import User
from eventboard.authentication.views import hash_secret


class InMemoryConfig:
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    ADMIN_USERS_PATH = '/nonexistent/admin_user.json'
    EMAIL_CONFIG_PATH = '/nonexistent/email_config.json'
    FRONTEND_URL = 'http://frontend.test'
    RESET_TOKEN_TTL = timedelta(hours=1)
    LOG_TIMEZONE = 'UTC'
    PORT = 3000


class RecordingMailer:
    """Keeps every reset email in memory instead of calling Brevo."""

    def __init__(self):
        self.sent = []

    def send_password_reset(self, user, reset_link):
        self.sent.append({'email': user.email, 'link': reset_link})

    @property
    def last_token(self):
        link = self.sent[-1]['link']
        return link.split('/reset-password/')[1].split('?')[0]


@pytest.fixture()
def mailer():
    return RecordingMailer()


@pytest.fixture()
def app(mailer):
    app = create_app(InMemoryConfig, mailer=mailer)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


USER_PAYLOAD = {
    'first_name': 'Ada',
    'last_name': 'Lovelace',
    'email': 'ada@example.com',
    'password': 'analytical-engine',
}


@pytest.fixture()
def registered_user(client):
    response = client.post('/api/auth/register', json=USER_PAYLOAD)
    assert response.status_code == 201
    return response.get_json()['user']


@pytest.fixture()
def logged_in_client(client, registered_user):
    response = client.post('/api/auth/login', json={
        'email': USER_PAYLOAD['email'],
        'password': USER_PAYLOAD['password'],
    })
    assert response.status_code == 200
    return client


@pytest.fixture()
def admin_client(app):
    with app.app_context():
        admin = User(
            first_name='Grace',
            last_name='Hopper',
            email='admin@example.com',
            password=hash_secret('compiler-pass'),
            is_admin=True,
        )
        db.session.add(admin)
        db.session.commit()

    client = app.test_client()
    response = client.post('/api/auth/login', json={'email': 'admin@example.com', 'password': 'compiler-pass'})
    assert response.status_code == 200
    return client


@pytest.fixture()
def fetch_user(app):
    def fetch(email):
        with app.app_context():
            return User.query.filter_by(email=email).first()
    return fetch
