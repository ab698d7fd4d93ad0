from .main import main_bp
from .preferences import preferences_bp
from .timetable import timetable_bp
from .notifications import notifications_bp
from .feedback import feedback_bp

__all__ = ['main_bp', 'preferences_bp', 'timetable_bp', 'notifications_bp', 'feedback_bp']
