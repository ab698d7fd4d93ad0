import os
import dotenv
dotenv.load_dotenv()
basedir = os.path.abspath(os.path.dirname(__file__))

# Flask configuration
SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-key-please-change-in-production'
DEBUG = os.environ.get('FLASK_DEBUG', '1') == '1'

# Database configuration
SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + os.path.join(basedir, 'timetable.db')
SQLALCHEMY_TRACK_MODIFICATIONS = False

# Notification cleanup
NOTIFICATION_CLEANUP_ENABLED = os.environ.get('NOTIFICATION_CLEANUP_ENABLED', '1') == '1'
NOTIFICATION_RETENTION_HOURS = int(os.environ.get('NOTIFICATION_RETENTION_HOURS', '24'))
