# eventboard/decorators.py
from functools import wraps
from flask_login import current_user
from eventboard.errors import NotAuthenticated, NotAuthorized


def admin_required(view):
    """Reject principals without the admin flag. Stack below ``login_required``."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_user.is_authenticated:
            raise NotAuthenticated()
        if not current_user.is_admin:
            raise NotAuthorized()
        return view(*args, **kwargs)
    return wrapped
