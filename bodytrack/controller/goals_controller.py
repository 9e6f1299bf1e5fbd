from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from bodytrack.services.goal_service import GoalService
from bodytrack.utils.jwt_utils import get_current_user

goals_bp = Blueprint("goals", __name__, url_prefix="/api/goals")


@goals_bp.route("/target-weight", methods=["PUT"])
@jwt_required()
def set_target_weight():
    user = get_current_user()
    if not user:
        return jsonify({"error": "Unauthorized"}), 401

    data = request.get_json(silent=True) or {}
    return GoalService.set_target_weight(user.id, data)


@goals_bp.route("/weekly-summary", methods=["GET"])
@jwt_required()
def get_weekly_summary():
    user = get_current_user()
    if not user:
        return jsonify({"error": "Unauthorized"}), 401

    return GoalService.get_weekly_summary(user.id)


@goals_bp.route("/manual-update", methods=["POST"])
@jwt_required()
def manual_goal_update():
    user = get_current_user()
    if not user:
        return jsonify({"error": "Unauthorized"}), 401

    profile, error = GoalService.manual_update(user.id)
    if error:
        return jsonify({"error": error}), 400

    return jsonify(profile), 200
