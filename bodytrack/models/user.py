from datetime import datetime

from sqlalchemy import Enum as SAEnum

from bodytrack.extensions import db
from bodytrack.enums.app_enum import ActivityLevelEnum, GenderEnum, PrimaryGoalEnum


def _enum_value(value):
    return getattr(value, "value", value)


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    age = db.Column(db.Integer)
    gender = db.Column(SAEnum(GenderEnum))
    height_cm = db.Column(db.Float)
    weight_kg = db.Column(db.Float)
    activity_level = db.Column(SAEnum(ActivityLevelEnum))
    primary_goal = db.Column(SAEnum(PrimaryGoalEnum), nullable=False, default=PrimaryGoalEnum.fat_loss)

    target_weight = db.Column(db.Float)
    maintenance_calories = db.Column(db.Integer)
    protein_goal = db.Column(db.Integer)

    # Date of the last successful goal recalculation
    last_weekly_update = db.Column(db.Date, index=True)

    reset_password_token = db.Column(db.String(64), index=True)
    reset_password_expire = db.Column(db.DateTime)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    daily_logs = db.relationship(
        "DailyLog",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "age": self.age,
            "gender": _enum_value(self.gender),
            "height_cm": self.height_cm,
            "weight_kg": self.weight_kg,
            "activity_level": _enum_value(self.activity_level),
            "primary_goal": _enum_value(self.primary_goal),
            "target_weight": self.target_weight,
            "maintenance_calories": self.maintenance_calories,
            "protein_goal": self.protein_goal,
            "last_weekly_update": self.last_weekly_update.isoformat() if self.last_weekly_update else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
