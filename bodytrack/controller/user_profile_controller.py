from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from bodytrack.services.user_profile_service import UserProfileService
from bodytrack.utils.jwt_utils import get_current_user_id

user_profile_bp = Blueprint("user_profile", __name__, url_prefix="/api/profile")


@user_profile_bp.route("", methods=["PUT"])
@jwt_required()
def update_user_profile():
    user_id = get_current_user_id()
    if not user_id:
        return jsonify({"error": "Unauthorized"}), 401

    data = request.get_json(silent=True) or {}
    return UserProfileService.update_user_profile(user_id, data)


@user_profile_bp.route("", methods=["DELETE"])
@jwt_required()
def delete_user_account():
    user_id = get_current_user_id()
    if not user_id:
        return jsonify({"error": "Unauthorized"}), 401

    return UserProfileService.delete_user_account(user_id)
