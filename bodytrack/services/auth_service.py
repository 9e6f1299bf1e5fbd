import hashlib
import logging
import secrets
from datetime import datetime

from flask import current_app, jsonify
from flask_jwt_extended import create_access_token, set_access_cookies, unset_jwt_cookies
from werkzeug.security import check_password_hash, generate_password_hash

from bodytrack.extensions import db
from bodytrack.external import email_service
from bodytrack.models import DailyLog, User

logger = logging.getLogger(__name__)

RESET_EMAIL_TEMPLATE = """\
<!DOCTYPE html>
<html>
<body style="font-family: 'Open Sans', sans-serif; background-color: #F6FAFB;">
  <div style="max-width: 500px; margin: 50px auto; background: #ffffff; padding: 40px;">
    <h2>Password Reset Request</h2>
    <p>We received a password reset request for your account: <strong>{email}</strong>.</p>
    <p>Click the button below to reset your password. This link will expire in
       <strong>{minutes} minutes</strong>.</p>
    <a href="{reset_url}"
       style="background-color: #22D172; color: #FFFFFF; text-decoration: none;
              padding: 12px 20px; border-radius: 6px; font-weight: bold;">Reset Password</a>
    <p style="font-size: 13px; color: #888888;">
      If you didn't request this, you can safely ignore this email.
    </p>
  </div>
</body>
</html>
"""


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _token_response(user: User, status: int):
    token = create_access_token(identity=str(user.id))
    response = jsonify({"success": True, "token": token, "user": user.to_dict()})
    set_access_cookies(response, token)
    return response, status


class AuthService:

    @staticmethod
    def register_user(payload: dict):
        name = (payload.get("name") or "").strip()
        email = (payload.get("email") or "").strip().lower()
        password = payload.get("password") or ""

        if not all([name, email, password]):
            return jsonify({"error": "Name, email and password are required"}), 400

        if User.query.filter_by(email=email).first():
            return jsonify({"error": "User already exists"}), 400

        user = User(name=name, email=email, password_hash=generate_password_hash(password))
        db.session.add(user)
        db.session.commit()

        logger.info("[AuthService] Registered user %s", user.id)
        return _token_response(user, 201)

    @staticmethod
    def login_user(payload: dict):
        email = (payload.get("email") or "").strip().lower()
        password = payload.get("password") or ""

        user = User.query.filter_by(email=email).first()
        if not user or not check_password_hash(user.password_hash, password):
            return jsonify({"error": "Invalid Credentials"}), 400

        return _token_response(user, 200)

    @staticmethod
    def logout_user():
        response = jsonify({"success": True, "message": "Logged out"})
        unset_jwt_cookies(response)
        return response, 200

    @staticmethod
    def get_logged_in_user(user_id: int):
        user = db.session.get(User, user_id)
        if not user:
            return jsonify({"error": "User not found"}), 404

        data = user.to_dict()
        latest_log = (
            DailyLog.query
            .filter(DailyLog.user_id == user_id, DailyLog.weight.isnot(None))
            .order_by(DailyLog.log_date.desc())
            .first()
        )
        if latest_log:
            data["weight_kg"] = latest_log.weight

        return jsonify(data), 200

    @staticmethod
    def forgot_password(payload: dict):
        email = (payload.get("email") or "").strip().lower()
        user = User.query.filter_by(email=email).first() if email else None
        if not user:
            # Same answer whether or not the account exists
            return jsonify({"success": True, "data": "Email sent"}), 200

        config = current_app.config
        reset_token = secrets.token_hex(20)
        user.reset_password_token = hash_reset_token(reset_token)
        user.reset_password_expire = datetime.utcnow() + config["RESET_TOKEN_EXPIRES"]
        db.session.commit()

        reset_url = f"{config['FRONTEND_URL'].rstrip('/')}/resetpassword/{reset_token}"
        html = RESET_EMAIL_TEMPLATE.format(
            email=user.email,
            reset_url=reset_url,
            minutes=int(config["RESET_TOKEN_EXPIRES"].total_seconds() // 60),
        )

        try:
            email_service.send_email(user.email, "Password Reset Request - BodyTrack App", html)
        except Exception:
            logger.exception("[AuthService] Could not send password reset email to user %s", user.id)
            user.reset_password_token = None
            user.reset_password_expire = None
            db.session.commit()
            return jsonify({"error": "Email could not be sent"}), 500

        return jsonify({"success": True, "data": "Reset email sent successfully"}), 200

    @staticmethod
    def reset_password(reset_token: str, payload: dict):
        password = payload.get("password") or ""
        if not password:
            return jsonify({"error": "Password is required"}), 400

        user = (
            User.query
            .filter(
                User.reset_password_token == hash_reset_token(reset_token),
                User.reset_password_expire > datetime.utcnow(),
            )
            .first()
        )
        if not user:
            return jsonify({"error": "Invalid or expired token"}), 400

        user.password_hash = generate_password_hash(password)
        user.reset_password_token = None
        user.reset_password_expire = None
        db.session.commit()

        return jsonify({"success": True, "data": "Password reset successful"}), 200
