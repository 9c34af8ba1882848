from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .academics.mysql_academic_repository import MySQLAcademicRepository
from .academics.repository import AcademicRepository
from .academics.service import AcademicService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.self_mark import SelfMarkPolicy
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .reports.dashboard import DashboardService
from .reports.service import ReportService
from .scope.resolver import ScopeResolver
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionService
from .stats.calculator import WeightedRateCalculator
from .stats.service import AttendanceStatsService
from .users.mysql_user_repository import MySQLFacultyRepository, MySQLStudentRepository
from .users.repository import FacultyRepository, StudentRepository
from .users.service import AccountService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    faculty_repo: FacultyRepository
    students_repo: StudentRepository
    academics_repo: AcademicRepository
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository

    scope: ScopeResolver
    account_service: AccountService
    academic_service: AcademicService
    session_service: SessionService
    attendance_service: AttendanceService
    stats_service: AttendanceStatsService
    report_service: ReportService
    dashboard_service: DashboardService

    clock: Callable[[], datetime] = now_local


def wire(
    *,
    faculty_repo: FacultyRepository,
    students_repo: StudentRepository,
    academics_repo: AcademicRepository,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    settings=None,
    conn: Optional[DatabaseConnection] = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Build every service on top of the given repositories.

    ``settings`` is any object exposing the knobs of a ``config`` module;
    missing attributes fall back to ``core.constants``.
    """

    def setting(name: str, default):
        return getattr(settings, name, default) if settings is not None else default

    scope = ScopeResolver(academics_repo, sessions_repo)
    stats_service = AttendanceStatsService(
        academics_repo,
        sessions_repo,
        attendance_repo,
        calculator=WeightedRateCalculator(),
        faculty_empty_rate=setting("FACULTY_EMPTY_RATE", constants.FACULTY_EMPTY_RATE),
        student_empty_rate=setting("STUDENT_DASHBOARD_EMPTY_RATE", constants.STUDENT_DASHBOARD_EMPTY_RATE),
        parallel_reads=setting("REPORT_PARALLEL_READS", True),
    )
    policy = SelfMarkPolicy(
        late_threshold_minutes=int(setting("SELF_MARK_LATE_MINUTES", constants.DEFAULT_LATE_THRESHOLD_MINUTES)),
        close_grace_minutes=int(setting("SELF_MARK_CLOSE_MINUTES", constants.DEFAULT_CLOSE_GRACE_MINUTES)),
    )

    return Container(
        conn=conn,
        faculty_repo=faculty_repo,
        students_repo=students_repo,
        academics_repo=academics_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        scope=scope,
        account_service=AccountService(faculty_repo, students_repo),
        academic_service=AcademicService(academics_repo, faculty_repo, students_repo, scope),
        session_service=SessionService(sessions_repo, attendance_repo, academics_repo, scope),
        attendance_service=AttendanceService(attendance_repo, academics_repo, scope, policy=policy),
        stats_service=stats_service,
        report_service=ReportService(scope, stats_service, academics_repo, faculty_repo, students_repo),
        dashboard_service=DashboardService(
            scope, stats_service, academics_repo, sessions_repo, attendance_repo, faculty_repo
        ),
        clock=clock,
    )


def build_container(*, db_config: dict, settings=None) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return wire(
        faculty_repo=MySQLFacultyRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        academics_repo=MySQLAcademicRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        settings=settings,
        conn=conn,
    )
