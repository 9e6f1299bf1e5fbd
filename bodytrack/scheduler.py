import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from apscheduler.schedulers.background import BackgroundScheduler

from bodytrack.services.goal_service import update_goals_for_all_users
from bodytrack.utils.dates import local_today

logger = logging.getLogger(__name__)

WEEKLY_GOAL_JOB_ID = "weekly_goal_update"


class WeeklyGoalScheduler:
    """
    Runs the weekly goal recalculation every Monday at 03:00.

    ``scheduler`` is anything with the APScheduler ``add_job`` / ``start`` /
    ``shutdown`` surface; a ``BackgroundScheduler`` is built when omitted.
    Without ``SCHEDULER_TIMEZONE`` the trigger follows the server's local time.
    """

    def __init__(self, app, scheduler=None):
        self.app = app
        self.timezone = app.config.get("SCHEDULER_TIMEZONE")
        if scheduler is None:
            scheduler = BackgroundScheduler(timezone=self.timezone) if self.timezone else BackgroundScheduler()
        self.scheduler = scheduler
        self.running = False

    def start(self) -> None:
        if self.running:
            return

        self.scheduler.add_job(
            self.run_job,
            trigger="cron",
            day_of_week="mon",
            hour=3,
            minute=0,
            id=WEEKLY_GOAL_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self.scheduler.start()
        self.running = True
        logger.info("[WeeklyGoalScheduler] Weekly goal update scheduled (Mon 03:00 %s)", self.timezone or "local")

    def stop(self) -> None:
        if not self.running:
            return
        self.scheduler.shutdown(wait=False)
        self.running = False
        logger.info("[WeeklyGoalScheduler] Scheduler stopped")

    def today(self):
        """Calendar date on the trigger's clock."""
        if self.timezone:
            return datetime.now(ZoneInfo(self.timezone)).date()
        return local_today()

    def run_job(self, today=None):
        """Job entry point. Never raises: a failed run waits for next week's firing."""
        logger.info("[WeeklyGoalScheduler] Running weekly goal update job...")
        with self.app.app_context():
            try:
                return update_goals_for_all_users(today or self.today())
            except Exception:
                logger.exception("[WeeklyGoalScheduler] Error running weekly goal update job")
                return None
