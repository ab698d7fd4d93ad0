import pytest

from models.slot import format_time_12_hour, grid_slots
from utils.timetable_generator import ScheduledEntry
from utils.timetable_validator import EntryValidationError, check_entry, validate_timetable


def entry(id, subject, day='Monday', time='9:00 AM', teacher='Dr. A', room='R1'):
    return {'id': id, 'subject': subject, 'day': day, 'time': time, 'teacher': teacher, 'room': room}


def test_clean_timetable_has_no_conflicts():
    entries = [
        entry('1', 'Math'),
        entry('2', 'Physics', teacher='Dr. B', room='R2'),
        entry('3', 'Chemistry', time='10:00 AM'),
    ]
    assert validate_timetable(entries) == []
    assert validate_timetable([]) == []


def test_teacher_conflict():
    entries = [entry('1', 'Math'), entry('2', 'Physics', room='R2')]
    assert validate_timetable(entries) == [
        'Teacher conflict: Dr. A has two classes at 9:00 AM on Monday'
    ]


def test_room_conflict():
    entries = [entry('1', 'Math'), entry('2', 'Physics', teacher='Dr. B')]
    assert validate_timetable(entries) == [
        'Room conflict: Room R1 has two classes at 9:00 AM on Monday'
    ]


def test_pair_can_report_both_conflicts():
    entries = [
        ScheduledEntry('1', 'Math', 'Tuesday', '2:00 PM', 'Dr. A', 'R1'),
        entry('2', 'Physics', day='Tuesday', time='2:00 PM'),
    ]
    assert validate_timetable(entries) == [
        'Teacher conflict: Dr. A has two classes at 2:00 PM on Tuesday',
        'Room conflict: Room R1 has two classes at 2:00 PM on Tuesday',
    ]


def test_every_pair_is_checked():
    entries = [entry(str(i), f'Subject {i}') for i in range(3)]
    assert len(validate_timetable(entries)) == 6


def test_check_entry_accepts_free_slot():
    check_entry(entry(None, 'Math', teacher='Dr. B', room='R2'), [entry('1', 'Physics')])


@pytest.mark.parametrize('missing', ['subject', 'teacher', 'day', 'time'])
def test_check_entry_requires_fields(missing):
    data = entry(None, 'Math')
    data[missing] = None
    with pytest.raises(EntryValidationError, match=missing):
        check_entry(data, [])


def test_check_entry_rejects_off_grid_values():
    with pytest.raises(EntryValidationError, match='Unknown day'):
        check_entry(entry(None, 'Math', day='Saturday'), [])
    with pytest.raises(EntryValidationError, match='Unknown time slot'):
        check_entry(entry(None, 'Math', time='8:00 AM'), [])


def test_check_entry_rejects_clashes():
    existing = [entry('1', 'Physics')]
    with pytest.raises(EntryValidationError, match='Teacher is already scheduled'):
        check_entry(entry(None, 'Math', room='R2'), existing)
    with pytest.raises(EntryValidationError, match='Room is already booked'):
        check_entry(entry(None, 'Math', teacher='Dr. B'), existing)


def test_check_entry_without_teacher_still_checks_clashes():
    check_entry(entry(None, 'Art', teacher=None, room='R2'), [entry('1', 'Physics')], require_teacher=False)

    existing = [entry('1', 'Art', teacher=None, room='R2')]
    with pytest.raises(EntryValidationError, match='Teacher is already scheduled'):
        check_entry(entry(None, 'Music', teacher=None, room='R3'), existing, require_teacher=False)
    with pytest.raises(EntryValidationError, match='Room is already booked'):
        check_entry(entry(None, 'Music', room='R2'), existing, require_teacher=False)
    with pytest.raises(EntryValidationError, match='subject'):
        check_entry(entry(None, None, teacher=None), [], require_teacher=False)


def test_check_entry_ignores_the_entry_being_updated():
    existing = [entry('1', 'Physics')]
    check_entry(entry('1', 'Physics II'), existing, ignore_id='1')


def test_grid_helpers():
    assert len(grid_slots()) == 40
    assert grid_slots()[0] == ('Monday', '9:00 AM')
    assert grid_slots()[-1] == ('Friday', '4:00 PM')
    assert format_time_12_hour('13:00') == '1:00 PM'
    assert format_time_12_hour('00:30') == '12:30 AM'
    assert format_time_12_hour('12:00') == '12:00 PM'
    assert format_time_12_hour('') == ''
