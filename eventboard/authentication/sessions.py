# eventboard/authentication/sessions.py
import secrets
import pytz
from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from eventboard.init_db import db
from eventboard.authentication.models import User, UserSession
from eventboard.logging_config import setup_logging

logger = setup_logging()

# Flask session key holding the opaque server-side session id
SESSION_KEY = 'sid'


class SessionStore:
    """Server-side session registry.

    The client only ever holds the opaque id returned by ``create``; the
    principal is resolved here on every request, so destroying the row is
    enough to make a captured cookie worthless.
    """

    def __init__(self, token_bytes=32, max_age=None):
        self.token_bytes = token_bytes
        self.max_age = max_age

    def is_expired(self, record):
        if self.max_age is None or record.created_at is None:
            return False
        now = datetime.now(pytz.utc).replace(tzinfo=None)
        return record.created_at + self.max_age <= now

    def prune(self):
        """Delete every session older than ``max_age``."""
        if self.max_age is None:
            return 0
        cutoff = datetime.now(pytz.utc).replace(tzinfo=None) - self.max_age
        removed = UserSession.query.filter(UserSession.created_at <= cutoff).delete()
        db.session.commit()
        return removed

    def create(self, user):
        self.prune()
        session_id = secrets.token_urlsafe(self.token_bytes)
        db.session.add(UserSession(id=session_id, user_id=user.id))
        db.session.commit()
        return session_id

    def lookup(self, session_id):
        if not session_id:
            return None
        record = db.session.get(UserSession, session_id)
        if record is None:
            return None
        if self.is_expired(record):
            self.destroy(session_id)
            return None
        return db.session.get(User, record.user_id)

    def destroy(self, session_id):
        if not session_id:
            return
        try:
            UserSession.query.filter_by(id=session_id).delete()
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to destroy session: {e}")
            raise
