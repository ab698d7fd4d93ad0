"""Fixed weekly grid shared by the generator, the API and the validators."""

DAYS = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday']

TIME_SLOTS = [
    '9:00 AM', '10:00 AM', '11:00 AM', '12:00 PM',
    '1:00 PM', '2:00 PM', '3:00 PM', '4:00 PM'
]


def is_valid_day(day):
    return day in DAYS


def is_valid_time(time):
    return time in TIME_SLOTS


def grid_slots():
    """All (day, time) pairs in grid order."""
    return [(day, time) for day in DAYS for time in TIME_SLOTS]


def format_time_12_hour(time24):
    """Convert '13:00' to '1:00 PM'. Empty input gives ''."""
    if not time24:
        return ''
    hours, minutes = time24.split(':')
    h = int(hours)
    suffix = 'PM' if h >= 12 else 'AM'
    h12 = h % 12 or 12
    return f'{h12}:{minutes} {suffix}'
