from .database import db
from .preference import Preference
from .timetable import TimetableEntry, TimetableStatus
from .notification import Notification
from .feedback import Feedback

__all__ = ['db', 'Preference', 'TimetableEntry', 'TimetableStatus', 'Notification', 'Feedback']
