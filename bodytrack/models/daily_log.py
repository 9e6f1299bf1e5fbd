from datetime import datetime

from bodytrack.extensions import db

MEALS = ("breakfast", "lunch", "dinner")
MACROS = ("calories", "protein", "fat", "carbs")


def empty_meal():
    return {macro: 0 for macro in MACROS}


def empty_nutrition():
    return {meal: empty_meal() for meal in MEALS}


class DailyLog(db.Model):
    __tablename__ = "daily_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    log_date = db.Column(db.Date, nullable=False)
    weight = db.Column(db.Float)

    # {"breakfast": {"calories", "protein", "fat", "carbs"}, "lunch": ..., "dinner": ...}
    nutrition = db.Column(db.JSON, nullable=False, default=empty_nutrition)
    # [{"type": "workout"|"cardio", "name": ..., ...}]
    sessions = db.Column(db.JSON, nullable=False, default=list)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", back_populates="daily_logs")

    __table_args__ = (
        db.UniqueConstraint("user_id", "log_date", name="uk_user_log_date"),
    )

    def _meal_total(self, macro):
        nutrition = self.nutrition or {}
        return sum((nutrition.get(meal) or {}).get(macro) or 0 for meal in MEALS)

    @property
    def total_calories(self):
        return self._meal_total("calories")

    @property
    def total_protein(self):
        return self._meal_total("protein")

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "log_date": self.log_date.isoformat(),
            "weight": self.weight,
            "nutrition": self.nutrition or empty_nutrition(),
            "sessions": self.sessions or [],
            "total_calories": self.total_calories,
            "total_protein": self.total_protein,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
