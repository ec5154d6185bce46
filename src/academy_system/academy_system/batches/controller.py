from __future__ import annotations

import logging

from flask import Flask, request, session

from ..common.datetime_utils import today_local
from ..common.http import current_role, domain_error, error, roles_required, success
from ..common.validators import require_positive_int
from ..core.constants import MANAGER_ROLES, STAFF_VIEW_ROLES
from ..core.exceptions import DataIntegrityError, DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _batch_id(raw: str) -> int:
        return require_positive_int(raw, "batch ID")

    @app.route("/batches", methods=["GET"], endpoint="list_batches")
    @roles_required(STAFF_VIEW_ROLES)
    def list_batches():
        try:
            batches = container.batch_service.list_batches()
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Get all batches error")
            return error("Internal server error while fetching batches", 500)
        return success(batches, count=len(batches))

    @app.route("/batches", methods=["POST"], endpoint="create_batch")
    @roles_required(MANAGER_ROLES)
    def create_batch():
        try:
            batch = container.batch_service.create_batch(
                current_role=current_role(),
                admin_user_id=int(session["user_id"]),
                payload=request.get_json(silent=True) or {},
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Create batch error")
            return error("Internal server error while creating batch", 500)
        return success({"batch": batch.to_dict()}, message="Batch created successfully", code=201)

    @app.route("/batches/<batch_id>", methods=["GET"], endpoint="get_batch")
    @roles_required(STAFF_VIEW_ROLES)
    def get_batch(batch_id: str):
        try:
            batch = container.batch_service.get_batch(_batch_id(batch_id))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Get batch error")
            return error("Internal server error while fetching batch", 500)
        return success(batch.to_dict())

    @app.route("/batches/<batch_id>/enrollments", methods=["GET"], endpoint="batch_enrollments")
    @roles_required(STAFF_VIEW_ROLES)
    def batch_enrollments(batch_id: str):
        try:
            rows = container.batch_service.list_enrollments(_batch_id(batch_id))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Get batch enrollments error")
            return error("Internal server error while fetching batch enrollments", 500)
        return success(rows)

    @app.route("/batches/<batch_id>/candidates/suggest", methods=["GET"], endpoint="suggest_candidates")
    @roles_required(MANAGER_ROLES)
    def suggest_candidates(batch_id: str):
        try:
            data = container.batch_service.suggest_candidates(_batch_id(batch_id), today=today_local())
        except DataIntegrityError:
            logger.exception("Corrupt record while suggesting candidates for batch %s", batch_id)
            return error("Internal server error while suggesting candidates", 500)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Suggest candidates error")
            return error("Internal server error while suggesting candidates", 500)
        return success(data)
