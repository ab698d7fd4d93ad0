from datetime import datetime
from .database import db


class TimetableEntry(db.Model):
    """A committed subject-to-slot assignment in the current timetable."""

    __tablename__ = 'timetable_entries'

    id = db.Column(db.String(64), primary_key=True)
    position = db.Column(db.Integer, nullable=False, default=0)
    subject = db.Column(db.String(200), nullable=False)
    day = db.Column(db.String(20), nullable=False)
    time = db.Column(db.String(20), nullable=False)
    teacher = db.Column(db.String(100), nullable=True)
    room = db.Column(db.String(50), nullable=True)

    def __repr__(self):
        return f'<TimetableEntry {self.subject} {self.day} {self.time}>'

    def to_dict(self):
        return {
            'id': self.id,
            'subject': self.subject,
            'day': self.day,
            'time': self.time,
            'teacher': self.teacher,
            'room': self.room
        }

    @classmethod
    def ordered(cls):
        return cls.query.order_by(cls.position, cls.id).all()

    @classmethod
    def next_position(cls):
        last = cls.query.order_by(cls.position.desc()).first()
        return last.position + 1 if last else 0


class TimetableStatus(db.Model):
    """Workflow flags and metadata for the current timetable (single row)."""

    __tablename__ = 'timetable_status'

    id = db.Column(db.Integer, primary_key=True)
    is_finalized = db.Column(db.Boolean, default=False, nullable=False)
    is_approved = db.Column(db.Boolean, default=False, nullable=False)
    last_generated = db.Column(db.DateTime, nullable=True)
    warnings = db.Column(db.JSON, default=list)

    def __repr__(self):
        return f'<TimetableStatus finalized={self.is_finalized} approved={self.is_approved}>'

    @classmethod
    def current(cls):
        """Fetch the status row, creating it on first use."""
        status = db.session.get(cls, 1)
        if not status:
            status = cls(id=1, is_finalized=False, is_approved=False, warnings=[])
            db.session.add(status)
            db.session.flush()
        return status

    def to_dict(self):
        return {
            'isFinalized': self.is_finalized,
            'isApproved': self.is_approved,
            'lastGenerated': self.last_generated.isoformat() if self.last_generated else None,
            'warnings': list(self.warnings or [])
        }
