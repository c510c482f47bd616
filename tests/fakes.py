"""In-memory repositories used across the test-suite."""
from __future__ import annotations

from dataclasses import replace
from datetime import time
from typing import Optional

from werkzeug.security import generate_password_hash

from campus_attendance.admin.model import SystemStats
from campus_attendance.advisors.model import ClassAdvisor
from campus_attendance.attendance.model import (
    AttendanceRecord,
    AttendanceSession,
    SessionExportRow,
    StudentRecordRow,
    SubjectStatusRow,
)
from campus_attendance.core.enums import Role, SessionStatus
from campus_attendance.core.exceptions import ConflictError
from campus_attendance.departments.model import Department
from campus_attendance.subjects.allocation_model import Allocation
from campus_attendance.subjects.model import Subject
from campus_attendance.timetable.model import TimetableSlot
from campus_attendance.users.model import Student, Teacher, User


class InMemoryUsers:
    def __init__(self, users=()):
        self.users: dict[int, User] = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def create_user(self, *, email, full_name, password_hash, role) -> int:
        user_id = max(self.users, default=0) + 1
        self.users[user_id] = User(
            user_id=user_id, email=email, full_name=full_name, password_hash=password_hash, role=role
        )
        return user_id

    def list_users(self, *, role=None):
        return [u for u in self.users.values() if role is None or u.role == role]

    def set_role(self, *, user_id, role) -> bool:
        self.users[user_id] = replace(self.users[user_id], role=role)
        return True


class InMemoryStudents:
    def __init__(self, students=()):
        self.students: dict[int, Student] = {s.student_id: s for s in students}
        self.set_semester_calls: list[tuple[list[int], int]] = []

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self.students.get(int(student_id))

    def get_by_user_id(self, user_id: int) -> Optional[Student]:
        return next((s for s in self.students.values() if s.user_id == int(user_id)), None)

    def list_students(self, *, semester=None, dept_id=None, section=None):
        return [
            s
            for s in sorted(self.students.values(), key=lambda s: s.roll_number)
            if (semester is None or s.semester == semester)
            and (dept_id is None or s.dept_id == dept_id)
            and (section is None or s.section == section)
        ]

    def create_student(self, *, email, full_name, password_hash, roll_number, dept_id, semester, section, batch) -> int:
        if any(s.roll_number == roll_number for s in self.students.values()):
            raise ConflictError("A student with this roll number or email already exists")
        student_id = max(self.students, default=0) + 1
        self.students[student_id] = Student(
            student_id=student_id,
            user_id=1000 + student_id,
            roll_number=roll_number,
            dept_id=dept_id,
            semester=semester,
            section=section,
            batch=batch,
            full_name=full_name,
            email=email,
        )
        return student_id

    def set_semester(self, *, student_ids, semester) -> int:
        self.set_semester_calls.append((list(student_ids), semester))
        for sid in student_ids:
            self.students[sid] = replace(self.students[sid], semester=semester)
        return len(student_ids)


class InMemoryTeachers:
    def __init__(self, teachers=()):
        self.teachers = list(teachers)

    def get_by_user_id(self, user_id: int) -> Optional[Teacher]:
        return next((t for t in self.teachers if t.user_id == int(user_id)), None)

    def list_teachers(self):
        return list(self.teachers)


class InMemoryDepartments:
    def __init__(self, departments=()):
        self.items: dict[int, Department] = {d.dept_id: d for d in departments}

    def list_all(self):
        return sorted(self.items.values(), key=lambda d: d.code)

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        return self.items.get(int(dept_id))

    def create(self, *, code, name, description=None) -> int:
        if any(d.code == code for d in self.items.values()):
            raise ConflictError("Department with this code already exists")
        dept_id = max(self.items, default=0) + 1
        self.items[dept_id] = Department(dept_id=dept_id, code=code, name=name, description=description)
        return dept_id

    def update(self, *, dept_id, code, name, description=None) -> bool:
        self.items[dept_id] = Department(dept_id=dept_id, code=code, name=name, description=description)
        return True

    def delete(self, *, dept_id) -> bool:
        return self.items.pop(int(dept_id), None) is not None


class InMemorySubjects:
    def __init__(self, subjects=()):
        self.items: dict[int, Subject] = {s.subject_id: s for s in subjects}

    def list_subjects(self, *, dept_id=None, semester=None):
        return [
            s
            for s in sorted(self.items.values(), key=lambda s: s.code)
            if (dept_id is None or s.dept_id == dept_id) and (semester is None or s.semester == semester)
        ]

    def get_by_id(self, subject_id: int) -> Optional[Subject]:
        return self.items.get(int(subject_id))

    def create(self, *, code, name, dept_id=None, semester=None, credits=None) -> int:
        if any(s.code == code for s in self.items.values()):
            raise ConflictError("Subject with this code already exists")
        subject_id = max(self.items, default=0) + 1
        self.items[subject_id] = Subject(
            subject_id=subject_id, code=code, name=name, dept_id=dept_id, semester=semester, credits=credits
        )
        return subject_id

    def delete(self, *, subject_id) -> bool:
        return self.items.pop(int(subject_id), None) is not None

    def update(self, subject) -> bool:
        if any(s.code == subject.code and s.subject_id != subject.subject_id for s in self.items.values()):
            raise ConflictError("Subject with this code already exists")
        self.items[subject.subject_id] = subject
        return True

    def upsert_many(self, drafts) -> int:
        for d in drafts:
            existing = next((s for s in self.items.values() if s.code == d.code), None)
            subject_id = existing.subject_id if existing else max(self.items, default=0) + 1
            self.items[subject_id] = Subject(
                subject_id=subject_id, code=d.code, name=d.name, dept_id=d.dept_id, semester=d.semester, credits=d.credits
            )
        return len(drafts)


class InMemoryAllocations:
    def __init__(self):
        self.items: dict[int, Allocation] = {}

    def list_allocations(self, *, academic_year=None, teacher_id=None):
        return [
            a
            for a in self.items.values()
            if (academic_year is None or a.academic_year == academic_year)
            and (teacher_id is None or a.teacher_id == teacher_id)
        ]

    def exists(self, *, teacher_id, subject_id, section, batch, academic_year) -> bool:
        return any(
            (a.teacher_id, a.subject_id, a.section, a.batch, a.academic_year)
            == (teacher_id, subject_id, section, batch, academic_year)
            for a in self.items.values()
        )

    def create(self, *, teacher_id, subject_id, section, batch, academic_year) -> int:
        allocation_id = max(self.items, default=0) + 1
        self.items[allocation_id] = Allocation(
            allocation_id=allocation_id,
            teacher_id=teacher_id,
            subject_id=subject_id,
            section=section,
            batch=batch,
            academic_year=academic_year,
        )
        return allocation_id

    def delete(self, *, allocation_id) -> bool:
        return self.items.pop(int(allocation_id), None) is not None


class InMemoryTimetable:
    def __init__(self, slots=()):
        self.items: dict[int, TimetableSlot] = {s.slot_id: s for s in slots}

    def list_slots(self, *, dept_id=None, semester=None, section=None, teacher_id=None):
        return [
            s
            for s in sorted(self.items.values(), key=lambda s: (s.day_of_week, s.start_time))
            if (dept_id is None or s.dept_id == dept_id)
            and (semester is None or s.semester == semester)
            and (section is None or s.section == section)
            and (teacher_id is None or s.teacher_id == teacher_id)
        ]

    def list_for_day_overlapping(self, *, day_of_week, start_time, end_time):
        return [
            s
            for s in self.items.values()
            if s.day_of_week == day_of_week and s.start_time <= end_time and s.end_time >= start_time
        ]

    def create(self, draft) -> int:
        slot_id = max(self.items, default=0) + 1
        self.items[slot_id] = TimetableSlot(
            slot_id=slot_id,
            subject_id=draft.subject_id,
            day_of_week=draft.day_of_week,
            start_time=draft.start_time,
            end_time=draft.end_time,
            teacher_id=draft.teacher_id,
            dept_id=draft.dept_id,
            room=draft.room,
            section=draft.section,
            semester=draft.semester,
        )
        return slot_id

    def delete(self, *, slot_id) -> bool:
        return self.items.pop(int(slot_id), None) is not None


class InMemorySessions:
    def __init__(self, sessions=()):
        self.items: dict[int, AttendanceSession] = {s.session_id: s for s in sessions}

    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        return self.items.get(int(session_id))

    def list_sessions(self, *, teacher_id=None, subject_id=None, session_date=None, status=None):
        out = [
            s
            for s in self.items.values()
            if (teacher_id is None or s.teacher_id == teacher_id)
            and (subject_id is None or s.subject_id == subject_id)
            and (session_date is None or s.session_date == session_date)
            and (status is None or s.status == status)
        ]
        out.sort(key=lambda s: (s.session_date, s.start_time or time.min), reverse=True)
        return out

    def create(self, *, subject_id, session_date, teacher_id=None, start_time=None, end_time=None, room=None,
               status=SessionStatus.SCHEDULED) -> int:
        session_id = max(self.items, default=0) + 1
        self.items[session_id] = AttendanceSession(
            session_id=session_id,
            subject_id=subject_id,
            session_date=session_date,
            start_time=start_time,
            end_time=end_time,
            room=room,
            status=status,
            teacher_id=teacher_id,
        )
        return session_id

    def update_status(self, *, session_id, status) -> bool:
        self.items[session_id] = replace(self.items[session_id], status=status)
        return True


class InMemoryRecords:
    def __init__(self, sessions: InMemorySessions, students: InMemoryStudents, records=()):
        self._sessions = sessions
        self._students = students
        self.items: dict[int, AttendanceRecord] = {r.record_id: r for r in records}

    def list_records(self, *, session_id=None, student_id=None):
        return [
            r
            for r in self.items.values()
            if (session_id is None or r.session_id == session_id) and (student_id is None or r.student_id == student_id)
        ]

    def list_for_student(self, *, student_id, subject_id=None, start_date=None, end_date=None):
        rows = []
        for r in self.items.values():
            session = self._sessions.get_by_id(r.session_id)
            if r.student_id != student_id or session is None:
                continue
            if subject_id is not None and session.subject_id != subject_id:
                continue
            if start_date is not None and session.session_date < start_date:
                continue
            if end_date is not None and session.session_date > end_date:
                continue
            rows.append(StudentRecordRow(record=r, session=session))
        rows.sort(key=lambda row: row.session.session_date, reverse=True)
        return rows

    def list_for_student_in_sessions(self, *, student_id, session_ids):
        wanted = set(session_ids)
        return [r for r in self.items.values() if r.student_id == student_id and r.session_id in wanted]

    def list_statuses_for_students(self, *, student_ids):
        wanted = set(student_ids)
        return [r for r in self.items.values() if r.student_id in wanted]

    def list_subject_statuses(self, *, student_ids, subject_ids):
        students, subjects = set(student_ids), set(subject_ids)
        rows = []
        for r in self.items.values():
            session = self._sessions.get_by_id(r.session_id)
            if session is not None and r.student_id in students and session.subject_id in subjects:
                rows.append(SubjectStatusRow(student_id=r.student_id, subject_id=session.subject_id, status=r.status))
        return rows

    def upsert_many(self, *, session_id, marks, marked_at):
        saved = []
        for m in marks:
            existing = next(
                (r for r in self.items.values() if r.session_id == session_id and r.student_id == m.student_id),
                None,
            )
            record_id = existing.record_id if existing else max(self.items, default=0) + 1
            self.items[record_id] = AttendanceRecord(
                record_id=record_id,
                session_id=session_id,
                student_id=m.student_id,
                status=m.status,
                marked_at=marked_at,
                notes=m.notes,
            )
            saved.append(self.items[record_id])
        return saved

    def update_status(self, *, record_id, session_id, status, marked_at):
        r = self.items.get(int(record_id))
        if r is None or r.session_id != int(session_id):
            return None
        self.items[r.record_id] = replace(r, status=status, marked_at=marked_at)
        return self.items[r.record_id]

    def export_rows(self, *, session_id):
        rows = []
        for r in self.list_records(session_id=session_id):
            s = self._students.get_by_id(r.student_id)
            rows.append(
                SessionExportRow(
                    roll_number=s.roll_number if s else "",
                    full_name=(s.full_name if s else "") or "",
                    email=(s.email if s else "") or "",
                    status=r.status,
                    marked_at=r.marked_at,
                )
            )
        rows.sort(key=lambda row: row.roll_number)
        return rows


class InMemoryAdvisors:
    def __init__(self, users: InMemoryUsers, advisors=()):
        self._users = users
        self.items: dict[int, ClassAdvisor] = {a.advisor_id: a for a in advisors}

    def list_all(self):
        return sorted(self.items.values(), key=lambda a: a.advisor_id, reverse=True)

    def get_by_user_id(self, user_id: int) -> Optional[ClassAdvisor]:
        return next((a for a in self.items.values() if a.user_id == int(user_id)), None)

    def upsert(self, *, user_id, dept_id, semester, section, academic_year) -> None:
        existing = self.get_by_user_id(user_id)
        advisor_id = existing.advisor_id if existing else max(self.items, default=0) + 1
        user = self._users.get_by_id(user_id)
        self.items[advisor_id] = ClassAdvisor(
            advisor_id=advisor_id,
            user_id=user_id,
            dept_id=dept_id,
            semester=semester,
            section=section,
            academic_year=academic_year,
            full_name=user.full_name if user else None,
            email=user.email if user else None,
        )

    def delete(self, *, advisor_id) -> bool:
        return self.items.pop(int(advisor_id), None) is not None


class InMemoryStats:
    """Counts straight off the other fakes."""

    def __init__(self, users, departments, subjects, allocations):
        self._users = users
        self._departments = departments
        self._subjects = subjects
        self._allocations = allocations

    def count_rows(self) -> SystemStats:
        return SystemStats(
            users=len(self._users.users),
            departments=len(self._departments.items),
            subjects=len(self._subjects.items),
            allocations=len(self._allocations.items),
        )


def make_user(user_id: int, role: Role, *, email: Optional[str] = None, password: str = "secret123") -> User:
    return User(
        user_id=user_id,
        email=email or f"{role.value}{user_id}@campus.test",
        full_name=f"{role.value.title()} {user_id}",
        password_hash=generate_password_hash(password),
        role=role,
    )


def make_student(student_id: int, *, semester: int = 2, section: str = "A", user_id: Optional[int] = None) -> Student:
    return Student(
        student_id=student_id,
        user_id=user_id if user_id is not None else 100 + student_id,
        roll_number=f"CSE-{student_id:03d}",
        dept_id=1,
        semester=semester,
        section=section,
        batch="2026",
        full_name=f"Student {student_id}",
        email=f"s{student_id}@campus.test",
        dept_name="Computer Science",
        dept_code="CSE",
    )

