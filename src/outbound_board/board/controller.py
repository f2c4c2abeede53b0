from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, Response, g, jsonify, request

from ..common.datetime_utils import parse_optional_datetime
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFound,
    StoreUnavailable,
    ValidationError,
    WriteConflict,
)
from ..container import Container
from ..feed.sse import event_stream
from .presenters import (
    employee_to_dict,
    encode_snapshot,
    encode_tail,
    logs_to_list,
    result_to_dict,
    session_to_dict,
    snapshot_to_dict,
    stats_to_dict,
    summary_to_dict,
)

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    NotFound: 404,
    WriteConflict: 409,
    StoreUnavailable: 503,
}


def _error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register(app: Flask, container: Container) -> None:
    board = container.board_service

    @app.errorhandler(DomainError)
    def domain_error(e: DomainError):
        status = next((code for kind, code in ERROR_STATUS.items() if isinstance(e, kind)), 400)
        if status >= 500:
            logger.error("%s: %s", type(e).__name__, e)
        return _error(str(e), status)

    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            header = request.headers.get("Authorization", "")
            scheme, _, token = header.partition(" ")
            if scheme.lower() != "bearer" or not token.strip():
                return _error("Access token required", 401)
            g.board_session = board.resolve_session(token.strip())
            return view(*args, **kwargs)

        return wrapper

    def payload() -> dict:
        return request.get_json(silent=True) or {}

    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def login():
        data = payload()
        session = board.login(str(data.get("name", "")), str(data.get("pin", data.get("password", ""))))
        return jsonify(session_to_dict(session))

    @app.route("/api/outbounds", methods=["POST"], endpoint="api_mark_out")
    @token_required
    def mark_out():
        data = payload()
        try:
            expected = parse_optional_datetime(data.get("expected_return_at"))
        except ValueError:
            return _error("expected_return_at must be an ISO datetime", 400)
        result = board.submit_mark_out(
            g.board_session,
            data.get("location") or data.get("place"),
            expected_return_at=expected,
            employee_id=data.get("employee_id"),
        )
        return jsonify(result_to_dict(result))

    @app.route("/api/outbounds/return", methods=["POST"], endpoint="api_mark_return")
    @token_required
    def mark_return():
        result = board.submit_mark_return(g.board_session, payload().get("employee_id"))
        return jsonify(result_to_dict(result))

    @app.route("/api/checkin", methods=["POST"], endpoint="api_mark_in")
    @token_required
    def mark_in():
        result = board.submit_mark_in(g.board_session, payload().get("employee_id"))
        return jsonify(result_to_dict(result))

    @app.route("/api/records/<employee_id>", methods=["DELETE"], endpoint="api_clear_record")
    @token_required
    def clear_record(employee_id: str):
        result = board.submit_clear(g.board_session, employee_id)
        return jsonify(result_to_dict(result))

    @app.route("/api/snapshot", methods=["GET"], endpoint="api_snapshot")
    def snapshot():
        return jsonify(snapshot_to_dict(board.get_snapshot()))

    @app.route("/api/status/summary", methods=["GET"], endpoint="api_status_summary")
    def status_summary():
        return jsonify(summary_to_dict(board.get_snapshot().summary))

    @app.route("/api/logs", methods=["GET"], endpoint="api_logs")
    def recent_logs():
        limit = request.args.get("limit", type=int)
        return jsonify(logs_to_list(board.get_recent_logs(limit)))

    @app.route("/api/stream", methods=["GET"], endpoint="api_stream")
    def stream():
        frames = event_stream(container.feed, encode_status=encode_snapshot, encode_log=encode_tail)
        return Response(
            frames,
            mimetype="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    @app.route("/api/admin/stats", methods=["GET"], endpoint="api_admin_stats")
    @token_required
    def admin_stats():
        stats = board.get_stats(g.board_session, request.args.get("period", "week"))
        return jsonify(stats_to_dict(stats))

    @app.route("/api/admin/employees", methods=["GET"], endpoint="api_admin_employees")
    @token_required
    def admin_employees():
        return jsonify([employee_to_dict(e) for e in board.list_employees(g.board_session)])

    @app.route("/api/admin/employees", methods=["POST"], endpoint="api_admin_add_employee")
    @token_required
    def admin_add_employee():
        data = payload()
        result = board.provision(
            g.board_session,
            str(data.get("name", "")),
            department=data.get("department"),
            pin=None if data.get("pin") is None else str(data["pin"]),
        )
        return jsonify(result_to_dict(result)), 201

    @app.route("/api/admin/employees/<employee_id>", methods=["DELETE"], endpoint="api_admin_remove_employee")
    @token_required
    def admin_remove_employee(employee_id: str):
        return jsonify(result_to_dict(board.retire(g.board_session, employee_id)))
