# bodytrack/controller/daily_log_controller.py
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from bodytrack.services.daily_log_service import DailyLogService
from bodytrack.utils.jwt_utils import get_current_user_id

daily_log_bp = Blueprint("daily_log_bp", __name__, url_prefix="/api/logs")


@daily_log_bp.route("", methods=["GET"])
@jwt_required()
def get_user_logs():
    user_id = get_current_user_id()
    if not user_id:
        return jsonify({"error": "Unauthorized"}), 401

    return DailyLogService.get_user_logs(user_id)


@daily_log_bp.route("", methods=["POST"])
@jwt_required()
def create_or_update_log():
    user_id = get_current_user_id()
    if not user_id:
        return jsonify({"error": "Unauthorized"}), 401

    data = request.get_json(silent=True) or {}
    return DailyLogService.create_or_update_log(user_id, data)


@daily_log_bp.route("/<int:log_id>", methods=["PUT"])
@jwt_required()
def update_log(log_id):
    user_id = get_current_user_id()
    if not user_id:
        return jsonify({"error": "Unauthorized"}), 401

    data = request.get_json(silent=True) or {}
    return DailyLogService.update_log(user_id, log_id, data)


@daily_log_bp.route("/<int:log_id>", methods=["DELETE"])
@jwt_required()
def delete_log(log_id):
    user_id = get_current_user_id()
    if not user_id:
        return jsonify({"error": "Unauthorized"}), 401

    return DailyLogService.delete_log(user_id, log_id)


@daily_log_bp.route("/exerciselist", methods=["GET"])
@jwt_required()
def get_exercise_lists():
    user_id = get_current_user_id()
    if not user_id:
        return jsonify({"error": "Unauthorized"}), 401

    return DailyLogService.get_exercise_lists(user_id)
