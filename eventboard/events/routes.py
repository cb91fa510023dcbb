# eventboard/events/routes.py
from flask import Blueprint, jsonify
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError
from eventboard.init_db import db
from eventboard.errors import ApiError, InternalError
from eventboard.logging_config import setup_logging
from eventboard.helpers import request_data, form_bool
from eventboard.events.views import (
    create_event, update_event, events_for_review, all_events, review_event, get_event_or_404,
)


events_bp = Blueprint('events', __name__)

logger = setup_logging()


@events_bp.route('/submit', methods=['POST'])
@login_required
def submit_event():
    try:
        event = create_event(request_data(), current_user.id)
        logger.info(f"Event {event.id} submitted by user {current_user.id}.")
        return jsonify({'event': event.to_dict(), 'message': 'Event submitted successfully.'}), 201

    except ApiError:
        raise
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Database error while submitting event: {e}")
        raise InternalError() from e


@events_bp.route('/review', methods=['GET'])
def get_events_for_review():
    try:
        return jsonify([event.to_dict() for event in events_for_review()]), 200
    except SQLAlchemyError as e:
        logger.error(f"Database error while listing events for review: {e}")
        raise InternalError() from e


@events_bp.route('/review/<int:event_id>', methods=['PUT'])
def update_event_status(event_id):
    try:
        event = review_event(event_id, form_bool(request_data().get('isApproved')))
        logger.info(f"Event {event.id} marked {event.status}.")
        return jsonify({'event': event.to_dict(), 'message': 'Event status updated successfully.'}), 200

    except ApiError:
        raise
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Database error while reviewing event {event_id}: {e}")
        raise InternalError() from e


@events_bp.route('/<int:event_id>', methods=['PUT'])
@login_required
def edit_event(event_id):
    try:
        event = update_event(event_id, request_data())
        logger.info(f"Event {event.id} updated by user {current_user.id}.")
        return jsonify({'event': event.to_dict(), 'message': 'Event updated successfully.'}), 200

    except ApiError:
        raise
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Database error while updating event {event_id}: {e}")
        raise InternalError() from e


@events_bp.route('/<int:event_id>', methods=['GET'])
def get_event(event_id):
    return jsonify({'event': get_event_or_404(event_id).to_dict()}), 200


@events_bp.route('/', methods=['GET'])
def list_events():
    try:
        return jsonify([event.to_dict() for event in all_events()]), 200
    except SQLAlchemyError as e:
        logger.error(f"Database error while listing events: {e}")
        raise InternalError() from e
