"""Seed data script to populate the database with sample class-time preferences."""

from models import db, Preference, TimetableEntry, TimetableStatus


def seed_database():
    """Replace stored preferences and timetable with a sample department."""

    # Clear existing data
    TimetableEntry.query.delete()
    TimetableStatus.query.delete()
    Preference.query.delete()

    # Faculty preferences: submitter id -> preference
    faculty_data = {
        'FAC-MATH-01': {'subject': 'Linear Algebra', 'day': 'Monday', 'time': '9:00 AM',
                        'teacher': 'Dr. Manisha Jain', 'room': 'CR-011'},
        'FAC-MATH-02': {'subject': 'Differential Equations', 'day': 'Monday', 'time': '9:00 AM',
                        'teacher': 'Dr. Mamta Agrawal', 'room': 'CR-013'},
        'FAC-CSE-01': {'subject': 'Machine Learning', 'day': 'Tuesday', 'time': '10:00 AM',
                       'teacher': 'Prof. Anand Kumar', 'room': 'AB02-316'},
        'FAC-CSE-02': {'subject': 'Operating Systems', 'day': 'Wednesday', 'time': '11:00 AM',
                       'teacher': 'Prof. Rajesh Verma', 'room': 'AB02-330'},
        'FAC-CSE-03': {'subject': 'Data Structures', 'day': 'Wednesday', 'time': '11:00 AM',
                       'teacher': 'Prof. Amit Singh', 'room': 'AB02-330'},
        'FAC-CSE-04': {'subject': 'Deep Learning', 'day': 'Tuesday', 'time': '10:00 AM',
                       'teacher': 'Prof. Anand Kumar', 'room': 'AB02-423'},
        'FAC-HUM-01': {'subject': 'Technical Communication', 'day': 'Friday', 'time': '2:00 PM',
                       'teacher': 'Dr. Vikram Thakur', 'room': 'AB-516'},
    }

    student_data = {
        'STU-1001': {'subject': 'Machine Learning', 'day': 'Thursday', 'time': '1:00 PM'},
        'STU-1002': {'subject': 'Machine Learning', 'day': 'Tuesday', 'time': '10:00 AM'},
        'STU-1003': {'subject': 'Computer Networks', 'day': 'Friday', 'time': '9:00 AM', 'room': 'AB02-423'},
        'STU-1004': {'subject': 'Data Structures', 'day': 'Monday', 'time': '3:00 PM'},
        'STU-1005': {'subject': 'Linear Algebra', 'day': 'Thursday', 'time': '9:00 AM'},
    }

    for submitter_id, data in faculty_data.items():
        Preference.upsert('faculty', submitter_id, data)
    for submitter_id, data in student_data.items():
        Preference.upsert('student', submitter_id, data)

    db.session.commit()
    print("Database seeded successfully!")
    return len(faculty_data), len(student_data)


if __name__ == '__main__':
    from app import create_app

    with create_app({'NOTIFICATION_CLEANUP_ENABLED': False}).app_context():
        seed_database()
