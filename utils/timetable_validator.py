"""Conflict checks for finished or hand-edited timetables."""

from typing import Any, List, Optional, Sequence

from models.slot import is_valid_day, is_valid_time


class EntryValidationError(ValueError):
    """Raised when a manual timetable edit is rejected."""


def _field(entry: Any, name: str):
    # Entries may be dataclasses, ORM rows or plain dicts
    if isinstance(entry, dict):
        return entry.get(name)
    return getattr(entry, name, None)


def validate_timetable(entries: Sequence[Any]) -> List[str]:
    """
    Check every pair of entries for teacher and room double-booking.

    Args:
        entries: ScheduledEntry objects, TimetableEntry rows or dicts

    Returns:
        List of human-readable conflict messages, empty if clash-free
    """
    errors = []
    entries = list(entries)

    for i, entry1 in enumerate(entries):
        for entry2 in entries[i + 1:]:
            day, time = _field(entry1, 'day'), _field(entry1, 'time')
            if day != _field(entry2, 'day') or time != _field(entry2, 'time'):
                continue

            teacher = _field(entry1, 'teacher')
            if teacher == _field(entry2, 'teacher'):
                errors.append(f"Teacher conflict: {teacher} has two classes at {time} on {day}")

            room = _field(entry1, 'room')
            if room == _field(entry2, 'room'):
                errors.append(f"Room conflict: Room {room} has two classes at {time} on {day}")

    return errors


def check_entry(entry: Any, entries: Sequence[Any], ignore_id: Optional[str] = None,
                require_teacher: bool = True) -> None:
    """
    Validate a single manual add or update against the current entries.

    With require_teacher=False an entry may have no teacher, like the ones
    generated for student-only subjects. Clashes are checked either way.

    Raises:
        EntryValidationError: on missing fields, off-grid day/time, or a clash
    """
    required = ('subject', 'teacher', 'day', 'time') if require_teacher else ('subject', 'day', 'time')
    for name in required:
        if not _field(entry, name):
            raise EntryValidationError(f"{name} is required")

    day, time = _field(entry, 'day'), _field(entry, 'time')
    if not is_valid_day(day):
        raise EntryValidationError(f"Unknown day: {day}")
    if not is_valid_time(time):
        raise EntryValidationError(f"Unknown time slot: {time}")

    teacher, room = _field(entry, 'teacher'), _field(entry, 'room')
    for existing in entries:
        if ignore_id is not None and _field(existing, 'id') == ignore_id:
            continue
        if _field(existing, 'day') != day or _field(existing, 'time') != time:
            continue
        if _field(existing, 'teacher') == teacher:
            raise EntryValidationError('Teacher is already scheduled for this time')
        if _field(existing, 'room') == room:
            raise EntryValidationError('Room is already booked for this time')
