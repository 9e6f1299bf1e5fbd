from enum import Enum

class GenderEnum(str, Enum):
    male = "male"
    female = "female"

class ActivityLevelEnum(str, Enum):
    sedentary = "sedentary"
    light = "light"
    moderate = "moderate"
    active = "active"
    very_active = "very_active"

class PrimaryGoalEnum(str, Enum):
    fat_loss = "fat_loss"
    muscle_gain = "muscle_gain"

class SessionTypeEnum(str, Enum):
    workout = "workout"
    cardio = "cardio"
