# bodytrack/services/daily_log_service.py
import logging

from flask import jsonify

from bodytrack.extensions import db
from bodytrack.enums.app_enum import SessionTypeEnum
from bodytrack.models import DailyLog
from bodytrack.models.daily_log import MACROS, MEALS, empty_meal, empty_nutrition
from bodytrack.utils.dates import local_today, parse_log_date
from bodytrack.utils.numbers import compact_number, to_finite_number

logger = logging.getLogger(__name__)

SESSION_TYPES = {t.value for t in SessionTypeEnum}


def _validate_weight(weight):
    if weight is None:
        return None, None
    value = to_finite_number(weight)
    if value is None:
        return None, "weight must be a number"
    if value <= 0:
        return None, "weight must be > 0"
    return value, None


def _validate_nutrition(nutrition):
    """
    Coerce meal macros to numbers. Returns (nutrition, None) or (None, error message);
    unknown meals and macros are dropped.
    """
    if nutrition is None:
        return None, None
    if not isinstance(nutrition, dict):
        return None, "nutrition must be an object"

    cleaned = {}
    for meal in MEALS:
        values = nutrition.get(meal)
        if values is None:
            continue
        if not isinstance(values, dict):
            return None, f"nutrition.{meal} must be an object"
        cleaned[meal] = {}
        for macro in MACROS:
            if values.get(macro) is None:
                continue
            value = to_finite_number(values[macro])
            if value is None:
                return None, f"nutrition.{meal}.{macro} must be a number"
            if value < 0:
                return None, f"nutrition.{meal}.{macro} must be >= 0"
            cleaned[meal][macro] = compact_number(value)
    return cleaned, None


def _validate_sessions(sessions):
    if sessions is None:
        return None
    if not isinstance(sessions, list):
        return "sessions must be a list"
    for session in sessions:
        if not isinstance(session, dict):
            return "each session must be an object"
        if session.get("type") not in SESSION_TYPES:
            return "session type must be 'workout' or 'cardio'"
        if not session.get("name"):
            return "session name is required"
    return None


def merge_nutrition(current: dict | None, incoming: dict | None) -> dict:
    """Meal-by-meal merge; keys missing from ``incoming`` keep their value."""
    merged = {meal: dict((current or {}).get(meal) or empty_meal()) for meal in MEALS}
    if not isinstance(incoming, dict):
        return merged

    for meal in MEALS:
        values = incoming.get(meal)
        if not isinstance(values, dict):
            continue
        for macro in MACROS:
            if values.get(macro) is not None:
                merged[meal][macro] = values[macro]
    return merged


def merge_sessions(current: list | None, incoming: list) -> list:
    """Sessions with the same type and (case-insensitive) name are merged, others appended."""
    merged = [dict(s) for s in (current or [])]
    for new_session in incoming:
        name = (new_session.get("name") or "").lower()
        for index, existing in enumerate(merged):
            if existing.get("type") == new_session.get("type") and (existing.get("name") or "").lower() == name:
                merged[index] = {**existing, **new_session}
                break
        else:
            merged.append(dict(new_session))
    return merged


def _find_owned_log(user_id: int, log_id: int):
    log = db.session.get(DailyLog, log_id)
    if not log:
        return None, (jsonify({"error": "Log not found"}), 404)
    if log.user_id != user_id:
        return None, (jsonify({"error": "Not authorized"}), 403)
    return log, None


class DailyLogService:

    @staticmethod
    def create_or_update_log(user_id: int, payload: dict):
        log_date, error = parse_log_date(payload.get("log_date"))
        if error:
            return jsonify({"error": error}), 400
        if log_date > local_today():
            return jsonify({"error": "log_date cannot be in the future"}), 400

        weight, error = _validate_weight(payload.get("weight"))
        if error:
            return jsonify({"error": error}), 400

        sessions = payload.get("sessions")
        error = _validate_sessions(sessions)
        if error:
            return jsonify({"error": error}), 400

        nutrition, error = _validate_nutrition(payload.get("nutrition"))
        if error:
            return jsonify({"error": error}), 400

        log = DailyLog.query.filter_by(user_id=user_id, log_date=log_date).first()
        if not log:
            log = DailyLog(
                user_id=user_id,
                log_date=log_date,
                weight=weight,
                nutrition=merge_nutrition(empty_nutrition(), nutrition),
                sessions=list(sessions or []),
            )
            db.session.add(log)
        else:
            if weight is not None:
                log.weight = weight
            if nutrition:
                log.nutrition = merge_nutrition(log.nutrition, nutrition)
            if sessions:
                log.sessions = merge_sessions(log.sessions, sessions)

        db.session.commit()
        logger.info("[DailyLogService] Saved log %s for user %s on %s", log.id, user_id, log_date)
        return jsonify(log.to_dict()), 201

    @staticmethod
    def update_log(user_id: int, log_id: int, payload: dict):
        log, error_response = _find_owned_log(user_id, log_id)
        if error_response:
            return error_response

        weight, error = _validate_weight(payload.get("weight"))
        if error:
            return jsonify({"error": error}), 400

        nutrition, error = _validate_nutrition(payload.get("nutrition") or None)
        if error:
            return jsonify({"error": error}), 400

        sessions = payload.get("sessions")
        if isinstance(sessions, list):
            error = _validate_sessions(sessions)
            if error:
                return jsonify({"error": error}), 400

        if "weight" in payload:
            log.weight = weight
        if nutrition:
            log.nutrition = merge_nutrition(log.nutrition, nutrition)
        if isinstance(sessions, list):
            log.sessions = list(sessions)

        db.session.commit()
        return jsonify(log.to_dict()), 200

    @staticmethod
    def get_user_logs(user_id: int):
        logs = (
            DailyLog.query
            .filter_by(user_id=user_id)
            .order_by(DailyLog.log_date.desc())
            .all()
        )
        return jsonify([log.to_dict() for log in logs]), 200

    @staticmethod
    def delete_log(user_id: int, log_id: int):
        log, error_response = _find_owned_log(user_id, log_id)
        if error_response:
            return error_response

        db.session.delete(log)
        db.session.commit()
        return jsonify({"message": "Log deleted successfully"}), 200

    @staticmethod
    def get_exercise_lists(user_id: int):
        strength_names, cardio_names = [], []
        for log in DailyLog.query.filter_by(user_id=user_id).order_by(DailyLog.log_date.asc()).all():
            for session in log.sessions or []:
                name = session.get("name")
                if not name:
                    continue
                if session.get("type") == SessionTypeEnum.workout.value and name not in strength_names:
                    strength_names.append(name)
                elif session.get("type") == SessionTypeEnum.cardio.value and name not in cardio_names:
                    cardio_names.append(name)

        return jsonify({"strength_names": strength_names, "cardio_names": cardio_names}), 200
