# bodytrack/services/goal_service.py
import logging
from collections import OrderedDict
from datetime import date

from flask import jsonify
from sqlalchemy import or_

from bodytrack.extensions import db
from bodytrack.models import DailyLog, User
from bodytrack.utils.calorie_calculator import calculate_goals, calorie_goal, round_half_up
from bodytrack.utils.dates import local_today, most_recent_sunday, week_start
from bodytrack.utils.numbers import to_finite_number

logger = logging.getLogger(__name__)

NO_ANCHOR_LOG_MESSAGE = (
    "No weight log found for last Sunday. "
    "Please add a log for that day to update your goals."
)


def find_anchor_log(user_id: int, anchor_day: date):
    return DailyLog.query.filter_by(user_id=user_id, log_date=anchor_day).first()


def users_due_for_update(today: date):
    """Users never recalculated, or last recalculated before today."""
    return (
        User.query
        .filter(or_(User.last_weekly_update.is_(None), User.last_weekly_update < today))
        .order_by(User.id.asc())
        .all()
    )


def update_user_goals(user: User, today: date) -> bool:
    """
    Recalculate one user's goals from the weight logged on the anchor Sunday.
    Returns True when the user row was written, False when skipped.
    """
    anchor_day = most_recent_sunday(today)
    anchor_log = find_anchor_log(user.id, anchor_day)

    if not anchor_log or not anchor_log.weight:
        logger.info("[GoalService] No weight log on %s for user %s, skipping goal update", anchor_day, user.id)
        return False

    goals = calculate_goals(anchor_log.weight)
    if goals is None:
        logger.info("[GoalService] Unusable weight on %s for user %s, skipping goal update", anchor_day, user.id)
        return False

    user.maintenance_calories = goals.maintenance_calories
    user.protein_goal = goals.protein_goal
    user.last_weekly_update = today
    db.session.commit()

    logger.info(
        "[GoalService] Updated goals for user %s from %.1fkg: maintenance=%s protein=%s",
        user.id, anchor_log.weight, goals.maintenance_calories, goals.protein_goal
    )
    return True


def update_goals_for_all_users(today: date | None = None) -> dict:
    """
    Weekly batch: every due user is processed in turn; a failure on one user
    is logged and rolled back without stopping the rest. Errors raised by the
    selection query propagate to the caller.
    """
    today = today or local_today()
    users = users_due_for_update(today)
    logger.info("[GoalService] Found %d users due for a goal update", len(users))

    summary = {"selected": len(users), "updated": 0, "skipped": 0, "failed": 0}
    for user in users:
        user_id = user.id
        try:
            if update_user_goals(user, today):
                summary["updated"] += 1
            else:
                summary["skipped"] += 1
        except Exception:
            db.session.rollback()
            summary["failed"] += 1
            logger.exception("[GoalService] Goal update failed for user %s", user_id)

    logger.info(
        "[GoalService] Weekly goal update finished: %(updated)d updated, "
        "%(skipped)d skipped, %(failed)d failed", summary
    )
    return summary


def build_weekly_summary(user: User, logs) -> list:
    """Bucket logs by week-start Sunday, newest week first."""
    buckets = OrderedDict()
    for log in sorted(logs, key=lambda l: l.log_date):
        buckets.setdefault(week_start(log.log_date), []).append(log)

    summary = []
    for start, week_logs in buckets.items():
        count = len(week_logs)
        summary.append({
            "week_start": start.isoformat(),
            "avg_calories": round_half_up(sum(l.total_calories for l in week_logs) / count),
            "avg_protein": round_half_up(sum(l.total_protein for l in week_logs) / count),
            "log_count": count,
            "weight": week_logs[-1].weight,
            "calorie_goal": calorie_goal(user.maintenance_calories),
            "protein_goal": user.protein_goal,
        })

    summary.reverse()
    return summary


class GoalService:

    @staticmethod
    def set_target_weight(user_id: int, payload: dict):
        target_weight = payload.get("target_weight", payload.get("targetWeight"))
        if target_weight is None or target_weight == "":
            return jsonify({"error": "Target weight is required."}), 400

        target_weight = to_finite_number(target_weight)
        if target_weight is None:
            return jsonify({"error": "Target weight must be a number."}), 400
        if target_weight <= 0:
            return jsonify({"error": "Target weight must be greater than 0."}), 400

        user = db.session.get(User, user_id)
        if not user:
            return jsonify({"error": "User not found"}), 404

        user.target_weight = target_weight
        db.session.commit()
        return jsonify(user.to_dict()), 200

    @staticmethod
    def get_weekly_summary(user_id: int):
        user = db.session.get(User, user_id)
        if not user:
            return jsonify({"error": "User not found"}), 404

        logs = DailyLog.query.filter_by(user_id=user_id).all()
        return jsonify(build_weekly_summary(user, logs)), 200

    @staticmethod
    def manual_update(user_id: int, today: date | None = None):
        """Recalculate now, regardless of the weekly idempotency marker."""
        user = db.session.get(User, user_id)
        if not user:
            return None, "User not found"

        if not update_user_goals(user, today or local_today()):
            return None, NO_ANCHOR_LOG_MESSAGE

        return user.to_dict(), None
