from datetime import datetime
from .database import db

NOTIFICATION_TYPES = ('info', 'success', 'warning', 'error')


class Notification(db.Model):
    """A message delivered to a user after preference, generation or workflow events."""

    __tablename__ = 'notifications'

    id = db.Column(db.Integer, primary_key=True)
    recipient_id = db.Column(db.String(100), nullable=False, index=True)
    sender_id = db.Column(db.String(100), nullable=False)
    type = db.Column(db.String(20), nullable=False, default='info')
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)
    read = db.Column(db.Boolean, default=False, nullable=False)

    def __repr__(self):
        return f'<Notification {self.type} -> {self.recipient_id}: {self.title}>'

    def to_dict(self):
        return {
            'id': self.id,
            'recipientId': self.recipient_id,
            'senderId': self.sender_id,
            'type': self.type,
            'title': self.title,
            'message': self.message,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
            'read': self.read
        }

    @classmethod
    def send(cls, recipient_id, title, message, type='info', sender_id='system'):
        """Queue a notification on the session. The caller commits."""
        if type not in NOTIFICATION_TYPES:
            type = 'info'
        notification = cls(
            recipient_id=recipient_id,
            sender_id=sender_id,
            type=type,
            title=title if isinstance(title, str) else 'Notification',
            message=message if isinstance(message, str) else 'No message content provided.'
        )
        db.session.add(notification)
        return notification
