from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from bodytrack.services.auth_service import AuthService
from bodytrack.utils.jwt_utils import get_current_user_id

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.route("/register", methods=["POST"])
def register():
    data = request.get_json(silent=True) or {}
    return AuthService.register_user(data)


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or {}
    return AuthService.login_user(data)


@auth_bp.route("/logout", methods=["POST"])
def logout():
    return AuthService.logout_user()


@auth_bp.route("/user", methods=["GET"])
@jwt_required()
def get_logged_in_user():
    user_id = get_current_user_id()
    if not user_id:
        return jsonify({"error": "Unauthorized"}), 401

    return AuthService.get_logged_in_user(user_id)


@auth_bp.route("/forgotpassword", methods=["POST"])
def forgot_password():
    data = request.get_json(silent=True) or {}
    return AuthService.forgot_password(data)


@auth_bp.route("/resetpassword/<string:reset_token>", methods=["PUT"])
def reset_password(reset_token):
    data = request.get_json(silent=True) or {}
    return AuthService.reset_password(reset_token, data)
