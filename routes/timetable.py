import uuid
from datetime import datetime

from flask import Blueprint, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from models import db, Preference, TimetableEntry, TimetableStatus, Notification
from models.preference import SUBMITTER_TYPES
from routes.helpers import get_current_user_id, get_json_body
from routes.preferences import validate_preference
from utils.timetable_generator import generate_timetable
from utils.timetable_validator import EntryValidationError, check_entry, validate_timetable

timetable_bp = Blueprint('timetable', __name__)

ENTRY_FIELDS = ('subject', 'day', 'time', 'teacher', 'room')


def _finalized_error():
    return jsonify({'error': 'Timetable is finalized. Unfinalize it before making changes.'}), 409


def _entry_fields(data):
    return {field: data.get(field) or None for field in ENTRY_FIELDS}


def _check_inline_preferences(preferences):
    """Apply the preference store's rules to preferences sent with a generate request."""
    if not isinstance(preferences, dict):
        return 'expected an object with faculty and student preferences'

    for side, records in preferences.items():
        submitter_type = 'student' if side == 'students' else side
        if submitter_type not in SUBMITTER_TYPES:
            continue
        if not isinstance(records, dict):
            return f'{side} must be an object'
        for submitter_id, record in records.items():
            if not isinstance(record, dict):
                return f'{side}.{submitter_id} must be an object'
            error = validate_preference(submitter_type, record)
            if error:
                return f'{side}.{submitter_id}: {error}'
    return None


@timetable_bp.route('/', methods=['GET'])
def get_timetable():
    """Get the current timetable and its workflow status."""
    status = TimetableStatus.current()
    db.session.commit()
    return jsonify({
        'entries': [entry.to_dict() for entry in TimetableEntry.ordered()],
        **status.to_dict()
    })


@timetable_bp.route('/generate', methods=['POST'])
def generate():
    """
    Generate a fresh timetable from stored preferences.
    A JSON body with a 'preferences' object overrides the stored ones.
    """
    user_id = get_current_user_id()
    status = TimetableStatus.current()
    if status.is_finalized:
        return _finalized_error()

    data = get_json_body()
    if 'preferences' in data:
        preferences = data['preferences']
        error = _check_inline_preferences(preferences)
        if error:
            return jsonify({'error': f'Invalid preferences: {error}'}), 400
    else:
        preferences = Preference.as_mappings(engine_types=True)

    try:
        result = generate_timetable(preferences)
    except TypeError as e:
        return jsonify({'error': f'Invalid preferences: {e}'}), 400

    try:
        TimetableEntry.query.delete()
        for position, entry in enumerate(result.entries):
            db.session.add(TimetableEntry(position=position, **entry.to_dict()))

        status.is_finalized = False
        status.is_approved = False
        status.last_generated = datetime.utcnow()
        status.warnings = list(result.warnings)

        Notification.send(
            recipient_id=user_id,
            sender_id=user_id,
            type='success',
            title='Timetable Generated',
            message='A new timetable has been successfully generated and saved.'
        )
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error saving generated timetable: {e}")
        Notification.send(
            recipient_id=user_id,
            sender_id=user_id,
            type='error',
            title='Timetable Generation Error',
            message='Failed to save the newly generated timetable to the database.'
        )
        db.session.commit()
        return jsonify({
            'error': 'Failed to save the generated timetable.',
            'warnings': result.warnings
        }), 500

    current_app.logger.info(
        f"Timetable generated: {len(result.entries)} entries, {len(result.warnings)} warnings"
    )
    return jsonify({'success': True, **result.to_dict()}), 201


@timetable_bp.route('/validate', methods=['GET'])
def validate():
    """List teacher and room conflicts in the stored timetable."""
    conflicts = validate_timetable(TimetableEntry.ordered())
    return jsonify({
        'valid': not conflicts,
        'conflicts': conflicts
    })


@timetable_bp.route('/entries', methods=['POST'])
def add_entry():
    """Add a single entry by hand."""
    if TimetableStatus.current().is_finalized:
        return _finalized_error()

    fields = _entry_fields(get_json_body())
    try:
        check_entry(fields, TimetableEntry.ordered())
    except EntryValidationError as e:
        return jsonify({'error': str(e)}), 400

    entry = TimetableEntry(id=uuid.uuid4().hex, position=TimetableEntry.next_position(), **fields)
    db.session.add(entry)
    db.session.commit()

    return jsonify({
        'success': True,
        'entry': entry.to_dict()
    }), 201


@timetable_bp.route('/entries/<entry_id>', methods=['PUT'])
def update_entry(entry_id):
    """Update an entry; fields left out keep their current values."""
    if TimetableStatus.current().is_finalized:
        return _finalized_error()

    entry = db.session.get(TimetableEntry, entry_id)
    if not entry:
        return jsonify({'error': 'Entry not found'}), 404

    data = get_json_body()
    fields = {field: data[field] if field in data else getattr(entry, field) for field in ENTRY_FIELDS}
    fields = _entry_fields(fields)
    try:
        check_entry(fields, TimetableEntry.ordered(), ignore_id=entry_id,
                    require_teacher=entry.teacher is not None)
    except EntryValidationError as e:
        return jsonify({'error': str(e)}), 400

    for field, value in fields.items():
        setattr(entry, field, value)
    db.session.commit()

    return jsonify({
        'success': True,
        'entry': entry.to_dict()
    })


@timetable_bp.route('/entries/<entry_id>', methods=['DELETE'])
def delete_entry(entry_id):
    """Delete an entry."""
    if TimetableStatus.current().is_finalized:
        return _finalized_error()

    entry = db.session.get(TimetableEntry, entry_id)
    if not entry:
        return jsonify({'error': 'Entry not found'}), 404

    db.session.delete(entry)
    db.session.commit()
    return jsonify({'success': True})


def _set_flags(title, message, finalized=None, approved=None):
    user_id = get_current_user_id()
    status = TimetableStatus.current()
    try:
        if finalized is not None:
            status.is_finalized = finalized
        if approved is not None:
            status.is_approved = approved
        Notification.send(user_id, title, message, type='success' if (finalized or approved) else 'info',
                          sender_id=user_id)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error updating timetable status: {e}")
        return jsonify({'error': 'Failed to update timetable status.'}), 500
    return jsonify({'success': True, **status.to_dict()})


@timetable_bp.route('/finalize', methods=['POST'])
def finalize():
    return _set_flags('Timetable Finalized', 'The timetable status has been updated.', finalized=True)


@timetable_bp.route('/unfinalize', methods=['POST'])
def unfinalize():
    """Unfinalize; an unfinalized timetable cannot stay approved."""
    return _set_flags('Timetable Unfinalized', 'The timetable status has been updated.',
                      finalized=False, approved=False)


@timetable_bp.route('/approve', methods=['POST'])
def approve():
    """Approve the timetable. Only a finalized timetable can be approved."""
    status = TimetableStatus.current()
    if not status.is_finalized:
        user_id = get_current_user_id()
        Notification.send(
            user_id,
            'Approval Failed',
            'Timetable must be finalized before it can be approved.',
            type='warning',
            sender_id=user_id
        )
        db.session.commit()
        return jsonify({'error': 'Timetable must be finalized before it can be approved.'}), 409
    return _set_flags('Timetable Approved', 'The timetable approval status has been updated.', approved=True)


@timetable_bp.route('/unapprove', methods=['POST'])
def unapprove():
    return _set_flags('Timetable Unapproved', 'The timetable approval status has been updated.', approved=False)


@timetable_bp.route('/export', methods=['GET'])
def export_timetable():
    """Export the timetable as JSON."""
    status = TimetableStatus.current()
    db.session.commit()
    return jsonify({
        'entries': [entry.to_dict() for entry in TimetableEntry.ordered()],
        'isFinalized': status.is_finalized,
        'isApproved': status.is_approved,
        'exportedAt': datetime.utcnow().isoformat()
    })


@timetable_bp.route('/import', methods=['POST'])
def import_timetable():
    """Replace the stored entries with an exported entry list."""
    if TimetableStatus.current().is_finalized:
        return _finalized_error()

    entries = get_json_body().get('entries')
    if not isinstance(entries, list):
        return jsonify({'error': 'entries must be a list'}), 400

    imported = []
    for index, raw in enumerate(entries):
        if not isinstance(raw, dict):
            return jsonify({'error': f'Entry {index} must be an object'}), 400
        fields = _entry_fields(raw)
        try:
            check_entry(fields, imported, require_teacher=False)
        except EntryValidationError as e:
            return jsonify({'error': f'Entry {index}: {e}'}), 400
        fields['id'] = str(raw.get('id') or uuid.uuid4().hex)
        if any(other['id'] == fields['id'] for other in imported):
            return jsonify({'error': f"Entry {index}: duplicate id {fields['id']}"}), 400
        imported.append(fields)

    try:
        TimetableEntry.query.delete()
        for position, fields in enumerate(imported):
            db.session.add(TimetableEntry(position=position, **fields))
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error importing timetable: {e}")
        return jsonify({'error': 'Failed to import timetable.'}), 500

    return jsonify({
        'success': True,
        'count': len(imported)
    })
