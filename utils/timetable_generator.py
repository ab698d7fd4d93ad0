"""
Timetable Generator Module
Assigns each requested subject to a single clash-free (day, time, teacher, room)
slot using a greedy, preference-ranked search.
"""

import logging
import uuid
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from models.slot import DAYS, TIME_SLOTS

logger = logging.getLogger(__name__)

FACULTY_WEIGHT = 2
STUDENT_WEIGHT = 1


class CandidateTier(IntEnum):
    """Ranking of a candidate slot. Higher tiers win."""
    OPEN = 1        # Any free slot on the grid
    STUDENT = 2     # Matches a student preference
    FACULTY = 3     # Matches a faculty preference


@dataclass
class SlotPreference:
    """One submission from a faculty member or a student."""
    subject: Optional[str]
    day: Optional[str] = None
    time: Optional[str] = None
    teacher: Optional[str] = None
    room: Optional[str] = None
    timestamp: Optional[str] = None
    submitter_type: Optional[str] = None
    additional_notes: str = ''

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'SlotPreference':
        """Build a preference from a raw record (camelCase or snake_case keys)."""
        return cls(
            subject=data.get('subject') or None,
            day=data.get('day'),
            time=data.get('time'),
            teacher=data.get('teacher') or None,
            room=data.get('room') or None,
            timestamp=data.get('timestamp'),
            submitter_type=data.get('submitter_type') or data.get('submitterType') or data.get('type'),
            additional_notes=data.get('additional_notes') or data.get('additionalNotes') or '',
        )


@dataclass
class CandidateSlot:
    """A scored, unconfirmed placement considered for one subject."""
    day: str
    time: str
    teacher: Optional[str]
    room: Optional[str]
    tier: CandidateTier


@dataclass
class ScheduledEntry:
    """A committed subject-to-slot assignment."""
    id: str
    subject: str
    day: str
    time: str
    teacher: Optional[str]
    room: Optional[str]

    def to_dict(self):
        return {
            'id': self.id,
            'subject': self.subject,
            'day': self.day,
            'time': self.time,
            'teacher': self.teacher,
            'room': self.room
        }


@dataclass
class GenerationResult:
    """Output of one generation run."""
    entries: List[ScheduledEntry] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self):
        return {
            'entries': [entry.to_dict() for entry in self.entries],
            'warnings': list(self.warnings)
        }


def _normalize(preferences: Mapping[str, Any]) -> Dict[str, SlotPreference]:
    if not isinstance(preferences, Mapping):
        raise TypeError(
            f"Preferences must be a mapping of submitter id to preference, got {type(preferences).__name__}"
        )
    normalized = {}
    for submitter_id, pref in preferences.items():
        if isinstance(pref, SlotPreference):
            normalized[submitter_id] = pref
        elif isinstance(pref, Mapping):
            normalized[submitter_id] = SlotPreference.from_mapping(pref)
        else:
            raise TypeError(f"Preference for {submitter_id!r} must be a mapping, got {type(pref).__name__}")
    return normalized


def collect_subjects(faculty: Mapping[str, SlotPreference],
                     student: Mapping[str, SlotPreference]) -> List[str]:
    """Distinct subject names in encounter order, faculty first."""
    subjects = []
    seen = set()
    for pref in list(faculty.values()) + list(student.values()):
        if pref.subject is None or pref.subject in seen:
            continue
        seen.add(pref.subject)
        subjects.append(pref.subject)
    return subjects


def subject_priority(subject: str,
                     faculty: Mapping[str, SlotPreference],
                     student: Mapping[str, SlotPreference]) -> int:
    faculty_count = sum(1 for p in faculty.values() if p.subject == subject)
    student_count = sum(1 for p in student.values() if p.subject == subject)
    return FACULTY_WEIGHT * faculty_count + STUDENT_WEIGHT * student_count


def prioritize_subjects(faculty: Mapping[str, SlotPreference],
                        student: Mapping[str, SlotPreference]) -> List[str]:
    """
    Order subjects by descending priority score.

    Ties keep encounter order (sorted() is stable), so identical inputs
    always produce identical schedules.
    """
    subjects = collect_subjects(faculty, student)
    return sorted(subjects, key=lambda s: subject_priority(s, faculty, student), reverse=True)


def is_slot_available(timetable: Sequence[ScheduledEntry], day: str, time: str,
                      teacher: Optional[str], room: Optional[str]) -> bool:
    """A slot is taken if any entry at the same day/time shares the teacher or the room."""
    return not any(
        entry.day == day and entry.time == time and
        (entry.teacher == teacher or entry.room == room)
        for entry in timetable
    )


def _default_id() -> str:
    return uuid.uuid4().hex


class TimetableGenerator:
    """
    Greedy preference-driven scheduler.

    Subjects are placed one at a time in priority order. For each subject the
    free candidates are ranked faculty > student > open, and the best one is
    committed before moving on. There is no backtracking: a subject with no
    free candidate is skipped and reported in ``warnings``.
    """

    def __init__(self, faculty_preferences: Mapping[str, Any],
                 student_preferences: Mapping[str, Any],
                 id_factory: Optional[Callable[[], str]] = None):
        """
        Args:
            faculty_preferences: submitter id -> preference (SlotPreference or dict)
            student_preferences: submitter id -> preference (SlotPreference or dict)
            id_factory: callable returning a fresh unique entry id
        """
        self.faculty = _normalize(faculty_preferences)
        self.student = _normalize(student_preferences)
        self.id_factory = id_factory or _default_id
        self.warnings: List[str] = []

    def _preferences_for(self, prefs: Mapping[str, SlotPreference], subject: str) -> List[SlotPreference]:
        return [p for p in prefs.values() if p.subject == subject]

    def find_candidate_slots(self, subject: str, timetable: Sequence[ScheduledEntry]) -> List[CandidateSlot]:
        """Collect every free candidate for a subject, unsorted, in tier order of discovery."""
        candidates = []
        faculty_prefs = self._preferences_for(self.faculty, subject)
        student_prefs = self._preferences_for(self.student, subject)

        for prefs, tier in ((faculty_prefs, CandidateTier.FACULTY), (student_prefs, CandidateTier.STUDENT)):
            for pref in prefs:
                if is_slot_available(timetable, pref.day, pref.time, pref.teacher, pref.room):
                    candidates.append(CandidateSlot(pref.day, pref.time, pref.teacher, pref.room, tier))

        # Open slots reuse the first faculty preference's teacher and room only.
        anchor = faculty_prefs[0] if faculty_prefs else None
        teacher = anchor.teacher if anchor else None
        room = anchor.room if anchor else None
        for day in DAYS:
            for time in TIME_SLOTS:
                if is_slot_available(timetable, day, time, teacher, room):
                    candidates.append(CandidateSlot(day, time, teacher, room, CandidateTier.OPEN))

        return candidates

    def schedule_subject(self, subject: str, timetable: List[ScheduledEntry]) -> Optional[ScheduledEntry]:
        """Commit the best free slot for ``subject`` onto ``timetable``, or record a warning."""
        candidates = self.find_candidate_slots(subject, timetable)
        if not candidates:
            msg = f"Could not find slot for subject: {subject}"
            logger.warning(msg)
            self.warnings.append(msg)
            return None

        candidates.sort(key=lambda c: c.tier, reverse=True)
        best = candidates[0]
        entry = ScheduledEntry(
            id=self.id_factory(),
            subject=subject,
            day=best.day,
            time=best.time,
            teacher=best.teacher,
            room=best.room
        )
        timetable.append(entry)
        return entry

    def generate(self, timetable: Optional[List[ScheduledEntry]] = None) -> GenerationResult:
        """
        Build a timetable.

        Args:
            timetable: optional pre-filled entries to schedule around. They are
                not part of the returned entries.

        Returns:
            GenerationResult with the new entries and any warnings
        """
        self.warnings = []
        occupied: List[ScheduledEntry] = list(timetable or [])
        entries = []

        for subject in prioritize_subjects(self.faculty, self.student):
            entry = self.schedule_subject(subject, occupied)
            if entry is not None:
                entries.append(entry)

        logger.info("Generated %d entries, %d subjects unscheduled", len(entries), len(self.warnings))
        return GenerationResult(entries=entries, warnings=list(self.warnings))


def generate_timetable(preferences: Mapping[str, Any],
                       id_factory: Optional[Callable[[], str]] = None,
                       timetable: Optional[List[ScheduledEntry]] = None) -> GenerationResult:
    """
    Generate a timetable from ``{'faculty': {...}, 'student': {...}}``.

    ``students`` is accepted in place of ``student``; a missing side is empty.
    """
    if not isinstance(preferences, Mapping):
        raise TypeError(f"Preferences must be a mapping, got {type(preferences).__name__}")
    faculty = preferences.get('faculty') or {}
    student = preferences.get('student')
    if student is None:
        student = preferences.get('students') or {}
    generator = TimetableGenerator(faculty, student, id_factory=id_factory)
    return generator.generate(timetable)
