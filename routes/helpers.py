"""Request helpers shared by the blueprints."""

from flask import request

DEFAULT_USER_ID = 'system'


def get_current_user_id():
    """Caller identity from the X-User-Id header, or 'system'."""
    return request.headers.get('X-User-Id', '').strip() or DEFAULT_USER_ID


def get_json_body():
    """Request JSON as a dict; anything else becomes an empty dict."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
