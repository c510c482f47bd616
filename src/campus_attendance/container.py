from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .admin.mysql_stats_repository import MySQLStatsRepository
from .admin.repository import StatsRepository
from .admin.service import AdminStatsService
from .advisors.mysql_advisor_repository import MySQLAdvisorRepository
from .advisors.repository import AdvisorRepository
from .advisors.service import AdvisorService
from .attendance.mysql_record_repository import MySQLRecordRepository
from .attendance.mysql_session_repository import MySQLSessionRepository
from .attendance.repository import RecordRepository, SessionRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_DEFAULTER_THRESHOLD
from .database.connection import DBConfig, DatabaseConnection, StoreAccess
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.repository import DepartmentRepository
from .departments.service import DepartmentService
from .promotion.service import PromotionService
from .reports.service import CompiledReportService, DefaulterReportService
from .subjects.allocation_repository import AllocationRepository
from .subjects.mysql_allocation_repository import MySQLAllocationRepository
from .subjects.mysql_subject_repository import MySQLSubjectRepository
from .subjects.repository import SubjectRepository
from .subjects.service import AllocationService, SubjectService
from .teaching.service import TeacherClassService
from .timetable.mysql_timetable_repository import MySQLTimetableRepository
from .timetable.repository import TimetableRepository
from .timetable.service import TimetableService
from .users.mysql_student_repository import MySQLStudentRepository
from .users.mysql_teacher_repository import MySQLTeacherRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import StudentRepository, TeacherRepository, UserRepository
from .users.service import AuthService, StudentService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    admin_conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    students_repo: StudentRepository
    teachers_repo: TeacherRepository
    departments_repo: DepartmentRepository
    subjects_repo: SubjectRepository
    allocations_repo: AllocationRepository
    timetable_repo: TimetableRepository
    sessions_repo: SessionRepository
    records_repo: RecordRepository
    advisors_repo: AdvisorRepository
    stats_repo: StatsRepository

    auth_service: AuthService
    user_service: UserService
    student_service: StudentService
    department_service: DepartmentService
    subject_service: SubjectService
    allocation_service: AllocationService
    timetable_service: TimetableService
    attendance_service: AttendanceService
    promotion_service: PromotionService
    defaulter_report_service: DefaulterReportService
    compiled_report_service: CompiledReportService
    advisor_service: AdvisorService
    admin_stats_service: AdminStatsService
    teacher_class_service: TeacherClassService


def wire(
    *,
    users_repo: UserRepository,
    students_repo: StudentRepository,
    teachers_repo: TeacherRepository,
    departments_repo: DepartmentRepository,
    subjects_repo: SubjectRepository,
    allocations_repo: AllocationRepository,
    timetable_repo: TimetableRepository,
    sessions_repo: SessionRepository,
    records_repo: RecordRepository,
    advisors_repo: AdvisorRepository,
    stats_repo: StatsRepository,
    admin_users_repo: Optional[UserRepository] = None,
    admin_students_repo: Optional[StudentRepository] = None,
    defaulter_threshold: int = DEFAULT_DEFAULTER_THRESHOLD,
    clock: Callable[[], datetime] = now_local,
    conn: Optional[DatabaseConnection] = None,
    admin_conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of already constructed repositories.

    ``admin_*`` repositories run on the privileged store; they default to the
    regular ones.
    """

    admin_users_repo = admin_users_repo or users_repo
    admin_students_repo = admin_students_repo or students_repo

    return Container(
        conn=conn,
        admin_conn=admin_conn,
        users_repo=users_repo,
        students_repo=students_repo,
        teachers_repo=teachers_repo,
        departments_repo=departments_repo,
        subjects_repo=subjects_repo,
        allocations_repo=allocations_repo,
        timetable_repo=timetable_repo,
        sessions_repo=sessions_repo,
        records_repo=records_repo,
        advisors_repo=advisors_repo,
        stats_repo=stats_repo,
        auth_service=AuthService(admin_users_repo, admin_students_repo, teachers_repo),
        user_service=UserService(admin_users_repo),
        student_service=StudentService(admin_students_repo, teachers_repo, departments_repo),
        department_service=DepartmentService(departments_repo),
        subject_service=SubjectService(subjects_repo, departments_repo),
        allocation_service=AllocationService(allocations_repo),
        timetable_service=TimetableService(timetable_repo),
        attendance_service=AttendanceService(sessions_repo, records_repo, students_repo, clock=clock),
        promotion_service=PromotionService(students_repo),
        defaulter_report_service=DefaulterReportService(
            students_repo,
            records_repo,
            default_threshold=defaulter_threshold,
        ),
        compiled_report_service=CompiledReportService(students_repo, subjects_repo, records_repo, clock=clock),
        advisor_service=AdvisorService(advisors_repo, admin_users_repo, students_repo, teachers_repo),
        admin_stats_service=AdminStatsService(stats_repo),
        teacher_class_service=TeacherClassService(teachers_repo, allocations_repo, sessions_repo, clock=clock),
    )


def build_container(
    *,
    db_config: dict,
    admin_db_config: Optional[dict] = None,
    defaulter_threshold: int = DEFAULT_DEFAULTER_THRESHOLD,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config), StoreAccess.CONSTRAINED)
    admin_conn = DatabaseConnection.get_instance(
        DBConfig.from_dict(admin_db_config or db_config),
        StoreAccess.PRIVILEGED,
    )

    return wire(
        users_repo=MySQLUserRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        teachers_repo=MySQLTeacherRepository(conn),
        departments_repo=MySQLDepartmentRepository(conn),
        subjects_repo=MySQLSubjectRepository(conn),
        allocations_repo=MySQLAllocationRepository(conn),
        timetable_repo=MySQLTimetableRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        records_repo=MySQLRecordRepository(conn),
        advisors_repo=MySQLAdvisorRepository(conn),
        stats_repo=MySQLStatsRepository(conn),
        admin_users_repo=MySQLUserRepository(admin_conn),
        admin_students_repo=MySQLStudentRepository(admin_conn),
        defaulter_threshold=defaulter_threshold,
        conn=conn,
        admin_conn=admin_conn,
    )
