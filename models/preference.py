from datetime import datetime
from .database import db

SUBMITTER_TYPES = ('faculty', 'student')


class Preference(db.Model):
    """A faculty or student class-time preference. One active row per submitter."""

    __tablename__ = 'preferences'
    __table_args__ = (
        db.UniqueConstraint('submitter_type', 'submitter_id', name='uq_preference_submitter'),
    )

    id = db.Column(db.Integer, primary_key=True)
    submitter_id = db.Column(db.String(100), nullable=False, index=True)
    submitter_type = db.Column(db.String(20), nullable=False)  # faculty | student
    subject = db.Column(db.String(200), nullable=False)
    day = db.Column(db.String(20), nullable=False)
    time = db.Column(db.String(20), nullable=False)
    teacher = db.Column(db.String(100), nullable=True)
    room = db.Column(db.String(50), nullable=True)
    additional_notes = db.Column(db.Text, default='')
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Preference {self.submitter_type}:{self.submitter_id} {self.subject}>'

    def to_dict(self):
        return {
            'subject': self.subject,
            'day': self.day,
            'time': self.time,
            'teacher': self.teacher,
            'room': self.room,
            'additionalNotes': self.additional_notes or '',
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
            'type': self.submitter_type
        }

    def to_slot_preference(self):
        # Imported here to avoid a models <-> utils import cycle
        from utils.timetable_generator import SlotPreference
        return SlotPreference.from_mapping(self.to_dict())

    @classmethod
    def upsert(cls, submitter_type, submitter_id, data):
        """Save a preference, overwriting the submitter's previous one."""
        pref = cls.query.filter_by(submitter_type=submitter_type, submitter_id=submitter_id).first()
        if not pref:
            pref = cls(submitter_type=submitter_type, submitter_id=submitter_id)
            db.session.add(pref)

        pref.subject = data['subject'].strip()
        pref.day = data['day']
        pref.time = data['time']
        pref.teacher = (data.get('teacher') or '').strip() or None
        pref.room = (data.get('room') or '').strip() or None
        pref.additional_notes = data.get('additionalNotes') or data.get('additional_notes') or ''
        pref.timestamp = datetime.utcnow()
        return pref

    @classmethod
    def as_mappings(cls, engine_types=False):
        """
        Group stored preferences by submitter type.

        Returns:
            {'faculty': {submitter_id: ...}, 'student': {submitter_id: ...}} with
            dict values, or SlotPreference values when engine_types is set
        """
        result = {submitter_type: {} for submitter_type in SUBMITTER_TYPES}
        for pref in cls.query.order_by(cls.id).all():
            value = pref.to_slot_preference() if engine_types else pref.to_dict()
            result.setdefault(pref.submitter_type, {})[pref.submitter_id] = value
        return result
