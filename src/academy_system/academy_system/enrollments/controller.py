from __future__ import annotations

import logging

from flask import Flask, request

from ..common.datetime_utils import parse_date_prefix, today_local
from ..common.http import current_role, domain_error, error, roles_required, success
from ..core.constants import MANAGER_ROLES
from ..core.exceptions import DomainError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/enrollments", methods=["POST"], endpoint="create_enrollment")
    @roles_required(MANAGER_ROLES)
    def create_enrollment():
        payload = request.get_json(silent=True) or {}
        try:
            raw_date = payload.get("enrollmentDate")
            try:
                enrollment_date = parse_date_prefix(str(raw_date)) if raw_date else today_local()
            except ValueError:
                raise ValidationError("Invalid enrollmentDate")

            enrollment = container.enrollment_service.enroll(
                current_role=current_role(),
                student_id=payload.get("studentId"),
                batch_id=payload.get("batchId"),
                enrollment_date=enrollment_date,
                status=payload.get("status"),
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Create enrollment error")
            return error("Internal server error while creating enrollment", 500)

        return success(
            {
                "id": enrollment.enrollment_id,
                "studentId": enrollment.student_id,
                "batchId": enrollment.batch_id,
                "enrollmentDate": enrollment.enrollment_date.isoformat(),
                "status": enrollment.status,
            },
            message="Student enrolled successfully",
            code=201,
        )
