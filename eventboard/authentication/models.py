# eventboard/authentication/models.py
from datetime import datetime
from flask_login import UserMixin
from eventboard.init_db import db

MAX_GENRES = 3


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    __table_args__ = (
        db.CheckConstraint(
            '(reset_token IS NULL) = (reset_token_expires IS NULL)',
            name='ck_user_reset_token_pair',
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(50), nullable=False)
    last_name = db.Column(db.String(50), nullable=False)
    email = db.Column(db.String(100), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    user_description = db.Column(db.Text, nullable=True)
    top_music_genres = db.Column(db.JSON, nullable=False, default=list)
    is_logged_in = db.Column(db.Boolean, nullable=False, default=False)
    is_admin = db.Column(db.Boolean, nullable=False, default=False)
    reset_token = db.Column(db.String(255), nullable=True)
    reset_token_expires = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        """Public representation; never includes the password or reset token hashes."""
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'user_description': self.user_description,
            'top_music_genres': list(self.top_music_genres or []),
            'is_logged_in': self.is_logged_in,
            'is_admin': self.is_admin,
        }


class UserSession(db.Model):
    __tablename__ = 'user_sessions'
    id = db.Column(db.String(64), primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    user = db.relationship('User', backref=db.backref('sessions', lazy=True, cascade='all, delete-orphan'))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
