from flask import Blueprint, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from models import db, Preference, Notification
from models.preference import SUBMITTER_TYPES
from models.slot import is_valid_day, is_valid_time
from routes.helpers import get_json_body

preferences_bp = Blueprint('preferences', __name__)


def validate_preference(submitter_type, data):
    """Return an error message for a bad submission, or None."""
    required = ['subject', 'day', 'time']
    if submitter_type == 'faculty':
        required.append('teacher')
    for field in required:
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            return f'{field} is required'

    if not is_valid_day(data['day']):
        return f"Unknown day: {data['day']}"
    if not is_valid_time(data['time']):
        return f"Unknown time slot: {data['time']}"
    return None


@preferences_bp.route('/', methods=['GET'])
def get_preferences():
    """Get all preferences keyed by submitter id."""
    return jsonify(Preference.as_mappings())


@preferences_bp.route('/<submitter_type>/<submitter_id>', methods=['PUT'])
def save_preference(submitter_type, submitter_id):
    """Save a faculty or student preference, replacing any earlier one."""
    if submitter_type not in SUBMITTER_TYPES:
        return jsonify({'error': f'Unknown submitter type: {submitter_type}'}), 404

    data = get_json_body()
    error = validate_preference(submitter_type, data)
    if error:
        return jsonify({'error': error}), 400

    try:
        pref = Preference.upsert(submitter_type, submitter_id, data)
        Notification.send(
            recipient_id=submitter_id,
            sender_id=submitter_id,
            type='success',
            title=f'{submitter_type.capitalize()} Preference Saved',
            message=f'Preference for {pref.subject} has been saved.'
        )
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to save preference for {submitter_id}: {e}")
        return jsonify({'error': 'Failed to save preference'}), 500

    return jsonify({
        'success': True,
        'preference': pref.to_dict()
    })


@preferences_bp.route('/', methods=['DELETE'])
def clear_preferences():
    """Delete every stored preference."""
    count = Preference.query.delete()
    db.session.commit()
    current_app.logger.info(f"Cleared {count} preferences")
    return jsonify({'success': True, 'deleted': count})
