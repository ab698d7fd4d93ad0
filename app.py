import threading
import time
from datetime import datetime, timedelta

from flask import Flask
from models import db, Notification
from routes import main_bp, preferences_bp, timetable_bp, notifications_bp, feedback_bp


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object('config')
    if test_config:
        app.config.update(test_config)

    # Initialize database
    db.init_app(app)

    # Register blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(preferences_bp, url_prefix='/api/preferences')
    app.register_blueprint(timetable_bp, url_prefix='/api/timetable')
    app.register_blueprint(notifications_bp, url_prefix='/api/notifications')
    app.register_blueprint(feedback_bp, url_prefix='/api/feedback')

    # Create tables
    with app.app_context():
        db.create_all()

    @app.after_request
    def add_header(response):
        """Add headers to prevent caching."""
        response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
        response.headers['Pragma'] = 'no-cache'
        response.headers['Expires'] = '0'
        return response

    @app.cli.command('seed-db')
    def seed_db_command():
        """Load sample preferences."""
        from data.seed_data import seed_database
        seed_database()

    if app.config.get('NOTIFICATION_CLEANUP_ENABLED'):
        # Start cleanup thread
        cleanup_thread = threading.Thread(target=cleanup_read_notifications, args=(app,), daemon=True)
        cleanup_thread.start()

    return app


def prune_read_notifications(retention_hours):
    """Delete read notifications older than the retention window. Needs an app context."""
    cutoff = datetime.utcnow() - timedelta(hours=retention_hours)
    old = Notification.query.filter(
        Notification.read.is_(True),
        Notification.timestamp < cutoff
    ).all()
    for notification in old:
        db.session.delete(notification)
    db.session.commit()
    return len(old)


def cleanup_read_notifications(app):
    """Background loop removing dismissed notifications."""
    while True:
        try:
            with app.app_context():
                removed = prune_read_notifications(app.config['NOTIFICATION_RETENTION_HOURS'])
                if removed:
                    app.logger.info(f"Cleanup: deleted {removed} read notifications")
        except Exception as e:
            app.logger.error(f"Cleanup error: {e}")

        # Run every hour (3600 seconds)
        time.sleep(3600)


if __name__ == '__main__':
    app = create_app()
    app.run(debug=app.config['DEBUG'], port=5000)
