# eventboard/events/views.py
from datetime import datetime
from eventboard.init_db import db
from eventboard.errors import MissingField, ValidationError, NotFound
from eventboard.events.models import Event, STATUS_PENDING, STATUS_APPROVED, STATUS_DENIED

EDITABLE_FIELDS = ('title', 'description', 'location', 'date')


def parse_event_date(date_str):
    if not date_str:
        return None
    try:
        return datetime.strptime(str(date_str), '%Y-%m-%d').date()
    except ValueError:
        raise ValidationError('Invalid date format. Use YYYY-MM-DD.')


def event_fields(data):
    """Pick the editable fields out of a request body, validating as we go."""
    if not data.get('title'):
        raise MissingField('Event title is required.')
    return {
        'title': str(data['title']).strip(),
        'description': data.get('description'),
        'location': data.get('location'),
        'date': parse_event_date(data.get('date')),
    }


def get_event_or_404(event_id):
    event = db.session.get(Event, event_id)
    if event is None:
        raise NotFound('Event not found.')
    return event


def create_event(data, user_id):
    # Submitter always comes from the session, never from the body
    event = Event(user_id=user_id, status=STATUS_PENDING, **event_fields(data))
    db.session.add(event)
    db.session.commit()
    return event


def update_event(event_id, data):
    event = get_event_or_404(event_id)
    for field, value in event_fields(data).items():
        setattr(event, field, value)
    db.session.commit()
    return event


def events_for_review():
    return Event.query.filter_by(status=STATUS_PENDING).order_by(Event.created_at, Event.id).all()


def all_events():
    return Event.query.order_by(Event.id).all()


def review_event(event_id, is_approved):
    if not isinstance(is_approved, bool):
        raise ValidationError('isApproved must be true or false.')
    event = get_event_or_404(event_id)
    event.status = STATUS_APPROVED if is_approved else STATUS_DENIED
    db.session.commit()
    return event
