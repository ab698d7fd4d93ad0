from flask import Blueprint, jsonify, request
from models import db, Notification
from routes.helpers import get_current_user_id

notifications_bp = Blueprint('notifications', __name__)


@notifications_bp.route('/', methods=['GET'])
def get_notifications():
    """Get notifications for a recipient, newest first."""
    recipient_id = request.args.get('recipient_id', '').strip() or get_current_user_id()
    query = Notification.query.filter_by(recipient_id=recipient_id)
    if request.args.get('unread') == '1':
        query = query.filter_by(read=False)
    notifications = query.order_by(Notification.timestamp.desc(), Notification.id.desc()).all()

    return jsonify({
        'notifications': [n.to_dict() for n in notifications],
        'unread_count': sum(1 for n in notifications if not n.read)
    })


@notifications_bp.route('/<int:notification_id>/dismiss', methods=['POST'])
def dismiss_notification(notification_id):
    """Mark a notification as read."""
    notification = db.session.get(Notification, notification_id)
    if not notification:
        return jsonify({'error': 'Notification not found'}), 404

    notification.read = True
    db.session.commit()
    return jsonify({'success': True, 'notification': notification.to_dict()})
