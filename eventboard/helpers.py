# eventboard/helpers.py
from flask import request
from eventboard.errors import ValidationError

FORM_BOOLEANS = {'true': True, 'false': False}


def request_data():
    """JSON object body, falling back to form fields for urlencoded clients."""
    if request.is_json:
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValidationError('Request body must be a JSON object.')
        return data
    return request.form.to_dict()


def form_bool(value):
    # Form fields arrive as strings; JSON booleans pass through untouched
    if isinstance(value, str):
        return FORM_BOOLEANS.get(value.strip().lower(), value)
    return value
