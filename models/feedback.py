from datetime import datetime
from .database import db

FEEDBACK_TYPES = ('approve', 'issue')


class Feedback(db.Model):
    """User feedback on the published timetable."""

    __tablename__ = 'feedback'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(100), nullable=False)
    user_name = db.Column(db.String(100), nullable=True)
    type = db.Column(db.String(20), nullable=False, default='approve')
    message = db.Column(db.Text, nullable=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Feedback {self.type} from {self.user_id}>'

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'userName': self.user_name,
            'type': self.type,
            'message': self.message,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None
        }
