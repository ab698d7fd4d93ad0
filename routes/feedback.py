from flask import Blueprint, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from models import db, Feedback, Notification
from models.feedback import FEEDBACK_TYPES
from routes.helpers import get_current_user_id, get_json_body

feedback_bp = Blueprint('feedback', __name__)

ADMIN_RECIPIENT = 'admin'


@feedback_bp.route('/', methods=['POST'])
def submit_feedback():
    """Submit feedback on the timetable and notify the admin."""
    data = get_json_body()
    message = (data.get('message') or '').strip()
    if not message:
        return jsonify({'error': 'Feedback cannot be empty.'}), 400

    feedback_type = data.get('type', 'approve')
    if feedback_type not in FEEDBACK_TYPES:
        return jsonify({'error': f'Unknown feedback type: {feedback_type}'}), 400

    user_id = data.get('userId') or get_current_user_id()
    user_name = data.get('userName') or user_id

    try:
        feedback = Feedback(user_id=user_id, user_name=user_name, type=feedback_type, message=message)
        db.session.add(feedback)
        Notification.send(
            recipient_id=ADMIN_RECIPIENT,
            sender_id=user_id,
            type='info',
            title='New Feedback Received',
            message=f'From: {user_name}. Type: {feedback_type}'
        )
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error saving feedback: {e}")
        return jsonify({'error': 'Failed to submit feedback. Please try again.'}), 500

    return jsonify({
        'success': True,
        'feedback': feedback.to_dict()
    }), 201


@feedback_bp.route('/', methods=['GET'])
def get_feedback():
    """Get all feedback, newest first."""
    entries = Feedback.query.order_by(Feedback.timestamp.desc(), Feedback.id.desc()).all()
    return jsonify({'feedback': [f.to_dict() for f in entries]})


@feedback_bp.route('/', methods=['DELETE'])
def clear_feedback():
    """Delete all feedback."""
    user_id = get_current_user_id()
    count = Feedback.query.delete()
    message = 'All user feedback has been cleared.' if count else 'There was no feedback to clear.'
    Notification.send(user_id, 'Feedback Cleared', message, type='success' if count else 'info', sender_id=user_id)
    db.session.commit()
    return jsonify({'success': True, 'deleted': count})
