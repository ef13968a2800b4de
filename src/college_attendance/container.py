from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import FrozenSet, Optional

from .advisors.mysql_substitution_repository import MySQLSubstitutionRepository
from .advisors.repository import SubstitutionRepository
from .advisors.service import AdvisorService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_ATTENDANCE_THRESHOLD, DEFAULT_PERIODS_PER_DAY
from .database.connection import DBConfig, DatabaseConnection
from .identity.mysql_account_repository import MySQLAccountRepository
from .identity.repository import AccountRepository
from .identity.service import AuthClient
from .identity.session import SessionContext
from .profiles.mysql_class_repository import MySQLClassRepository
from .profiles.mysql_faculty_repository import MySQLFacultyRepository
from .profiles.mysql_student_repository import MySQLStudentRepository
from .profiles.repository import ClassRepository, FacultyRepository, StudentRepository
from .profiles.resolver import RoleResolver
from .profiles.service import ProfileService
from .reports.service import ReportService
from .timetable.mysql_timetable_repository import MySQLTimetableRepository
from .timetable.repository import TimetableRepository
from .timetable.service import TimetableService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    accounts_repo: AccountRepository
    classes_repo: ClassRepository
    students_repo: StudentRepository
    faculty_repo: FacultyRepository
    attendance_repo: AttendanceRepository
    timetable_repo: TimetableRepository
    substitutions_repo: SubstitutionRepository

    resolver: RoleResolver
    profile_service: ProfileService
    attendance_service: AttendanceService
    timetable_service: TimetableService
    advisor_service: AdvisorService
    report_service: ReportService

    admin_emails: FrozenSet[str] = frozenset()

    def auth_client(self) -> AuthClient:
        """A fresh client per user agent; sessions are never shared between requests."""
        return AuthClient(self.accounts_repo)

    def session_context(self, auth: Optional[AuthClient] = None) -> SessionContext:
        return SessionContext(auth or self.auth_client(), self.resolver, admin_emails=self.admin_emails)


def assemble(
    *,
    accounts_repo: AccountRepository,
    classes_repo: ClassRepository,
    students_repo: StudentRepository,
    faculty_repo: FacultyRepository,
    attendance_repo: AttendanceRepository,
    timetable_repo: TimetableRepository,
    substitutions_repo: SubstitutionRepository,
    conn: Optional[DatabaseConnection] = None,
    threshold: float = DEFAULT_ATTENDANCE_THRESHOLD,
    periods_per_day: int = DEFAULT_PERIODS_PER_DAY,
    admin_emails: FrozenSet[str] = frozenset(),
) -> Container:
    """Wire services on top of the given repositories (MySQL or in-memory)."""
    resolver = RoleResolver(students_repo, faculty_repo, classes_repo)
    profile_service = ProfileService(classes_repo, students_repo, faculty_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        students_repo,
        threshold=threshold,
        periods_per_day=periods_per_day,
    )
    timetable_service = TimetableService(timetable_repo, students_repo, periods_per_day=periods_per_day)
    advisor_service = AdvisorService(substitutions_repo, faculty_repo, students_repo, classes_repo)
    report_service = ReportService(attendance_service, students_repo, classes_repo, faculty_repo, advisor_service)

    return Container(
        conn=conn,
        accounts_repo=accounts_repo,
        classes_repo=classes_repo,
        students_repo=students_repo,
        faculty_repo=faculty_repo,
        attendance_repo=attendance_repo,
        timetable_repo=timetable_repo,
        substitutions_repo=substitutions_repo,
        resolver=resolver,
        profile_service=profile_service,
        attendance_service=attendance_service,
        timetable_service=timetable_service,
        advisor_service=advisor_service,
        report_service=report_service,
        admin_emails=frozenset(e.lower() for e in admin_emails),
    )


def build_container(*, db_config: dict, settings: Optional[ModuleType] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        conn=conn,
        accounts_repo=MySQLAccountRepository(conn),
        classes_repo=MySQLClassRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        faculty_repo=MySQLFacultyRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        timetable_repo=MySQLTimetableRepository(conn),
        substitutions_repo=MySQLSubstitutionRepository(conn),
        threshold=float(getattr(settings, "ATTENDANCE_THRESHOLD", DEFAULT_ATTENDANCE_THRESHOLD)),
        periods_per_day=int(getattr(settings, "PERIODS_PER_DAY", DEFAULT_PERIODS_PER_DAY)),
        admin_emails=frozenset(getattr(settings, "ADMIN_EMAILS", frozenset())),
    )
