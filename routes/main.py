from flask import Blueprint, jsonify
from models.slot import DAYS, TIME_SLOTS

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    return jsonify({'message': 'Class Timetable Scheduler API'})


@main_bp.route('/grid')
def get_grid():
    """Fixed days and time slots preferences and entries must use."""
    return jsonify({'days': DAYS, 'time_slots': TIME_SLOTS})
