from .user import User
from .daily_log import DailyLog

__all__ = ["User", "DailyLog"]
