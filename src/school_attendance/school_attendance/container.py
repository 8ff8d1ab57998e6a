from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .audit.mysql_audit_repository import MySQLAuditLogRepository
from .audit.repository import AuditLogRepository
from .audit.service import AuditService
from .core.constants import DEFAULT_AUDIT_LOG_LIMIT
from .database.connection import DBConfig, DatabaseConnection
from .recap.service import RecapService
from .roster.factory import RosterLayoutFactory
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .users.mysql_profile_repository import MySQLProfileRepository
from .users.repository import ProfileRepository
from .users.service import ProfileService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    students_repo: StudentRepository
    attendance_repo: AttendanceRepository
    profiles_repo: ProfileRepository
    audit_repo: AuditLogRepository

    audit_service: AuditService
    student_service: StudentService
    attendance_service: AttendanceService
    recap_service: RecapService
    profile_service: ProfileService


def assemble_container(
    *,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    profiles_repo: ProfileRepository,
    audit_repo: AuditLogRepository,
    super_admin_email: str,
    audit_log_limit: int = DEFAULT_AUDIT_LOG_LIMIT,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""
    audit_service = AuditService(audit_repo, default_limit=audit_log_limit)
    return Container(
        conn=conn,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        profiles_repo=profiles_repo,
        audit_repo=audit_repo,
        audit_service=audit_service,
        student_service=StudentService(students_repo, audit_service, layout_factory=RosterLayoutFactory()),
        attendance_service=AttendanceService(attendance_repo, students_repo, audit_service),
        recap_service=RecapService(attendance_repo, students_repo),
        profile_service=ProfileService(profiles_repo, audit_service, super_admin_email=super_admin_email),
    )


def build_container(
    *,
    db_config: dict,
    super_admin_email: str,
    audit_log_limit: int = DEFAULT_AUDIT_LOG_LIMIT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return assemble_container(
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        profiles_repo=MySQLProfileRepository(conn),
        audit_repo=MySQLAuditLogRepository(conn),
        super_admin_email=super_admin_email,
        audit_log_limit=audit_log_limit,
        conn=conn,
    )
