import logging

from flask import jsonify

from bodytrack.extensions import db
from bodytrack.models import DailyLog, User
from bodytrack.enums.app_enum import ActivityLevelEnum, GenderEnum, PrimaryGoalEnum
from bodytrack.utils.calorie_calculator import calculate_goals
from bodytrack.utils.numbers import to_finite_number

logger = logging.getLogger(__name__)

ENUM_FIELDS = {
    "gender": GenderEnum,
    "activity_level": ActivityLevelEnum,
    "primary_goal": PrimaryGoalEnum,
}
NUMBER_FIELDS = ("age", "height_cm", "weight_kg")


def _parse_profile_fields(payload: dict):
    fields = {}
    for name, enum_cls in ENUM_FIELDS.items():
        if payload.get(name) is None:
            continue
        try:
            fields[name] = enum_cls(payload[name])
        except ValueError:
            allowed = ", ".join(e.value for e in enum_cls)
            return None, f"{name} must be one of: {allowed}"

    for name in NUMBER_FIELDS:
        if payload.get(name) is None:
            continue
        value = to_finite_number(payload[name])
        if value is None:
            return None, f"{name} must be a number"
        if value <= 0:
            return None, f"{name} must be > 0"
        fields[name] = int(value) if name == "age" else value

    return fields, None


class UserProfileService:

    @staticmethod
    def update_user_profile(user_id: int, payload: dict):
        user = db.session.get(User, user_id)
        if not user:
            return jsonify({"error": "User not found"}), 404

        fields, error = _parse_profile_fields(payload)
        if error:
            return jsonify({"error": error}), 400

        for name, value in fields.items():
            setattr(user, name, value)

        goals = calculate_goals(user.weight_kg)
        if goals:
            user.maintenance_calories = goals.maintenance_calories
            user.protein_goal = goals.protein_goal
        else:
            logger.warning("[UserProfileService] User %s has no weight yet, goals not calculated", user.id)

        db.session.commit()
        return jsonify(user.to_dict()), 200

    @staticmethod
    def delete_user_account(user_id: int):
        user = db.session.get(User, user_id)
        if not user:
            return jsonify({"error": "User not found"}), 404

        DailyLog.query.filter_by(user_id=user_id).delete()
        db.session.delete(user)
        db.session.commit()

        logger.info("[UserProfileService] Deleted user %s and all their logs", user_id)
        return jsonify({"message": "Your account has been permanently deleted."}), 200
