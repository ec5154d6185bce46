from __future__ import annotations

from dataclasses import dataclass

from .batches.eligibility.engine import CandidateEligibilityEngine
from .batches.mysql_batch_repository import MySQLBatchRepository
from .batches.service import BatchService
from .database.connection import DBConfig, DatabaseConnection
from .enrollments.mysql_enrollment_repository import MySQLEnrollmentRepository
from .enrollments.service import EnrollmentService
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .sessions.mysql_session_repository import MySQLSessionRepository
from .students.mysql_student_repository import MySQLStudentRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    students_repo: MySQLStudentRepository
    batches_repo: MySQLBatchRepository
    enrollments_repo: MySQLEnrollmentRepository
    payments_repo: MySQLPaymentRepository
    sessions_repo: MySQLSessionRepository

    auth_service: AuthService
    batch_service: BatchService
    enrollment_service: EnrollmentService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    students_repo = MySQLStudentRepository(conn)
    batches_repo = MySQLBatchRepository(conn)
    enrollments_repo = MySQLEnrollmentRepository(conn)
    payments_repo = MySQLPaymentRepository(conn)
    sessions_repo = MySQLSessionRepository(conn)

    auth_service = AuthService(users_repo)
    batch_service = BatchService(
        batches_repo,
        students_repo,
        payments_repo,
        enrollments_repo,
        sessions_repo,
        engine=CandidateEligibilityEngine(),
    )
    enrollment_service = EnrollmentService(enrollments_repo, users_repo, batches_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        students_repo=students_repo,
        batches_repo=batches_repo,
        enrollments_repo=enrollments_repo,
        payments_repo=payments_repo,
        sessions_repo=sessions_repo,
        auth_service=auth_service,
        batch_service=batch_service,
        enrollment_service=enrollment_service,
    )
