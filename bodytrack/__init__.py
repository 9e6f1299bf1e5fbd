import logging

from flask import Flask

from .config import Config
from .routes import register_routes
from .extensions import db, jwt, migrate
from .scheduler import WeeklyGoalScheduler


def create_app(config_object=Config, scheduler=None):
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    register_routes(app)

    with app.app_context():
        from bodytrack.models import (
            user,
            daily_log
        )
        db.create_all()

    from bodytrack.controller.auth_controller import auth_bp
    app.register_blueprint(auth_bp)

    from bodytrack.controller.user_profile_controller import user_profile_bp
    app.register_blueprint(user_profile_bp)

    from bodytrack.controller.goals_controller import goals_bp
    app.register_blueprint(goals_bp)

    from bodytrack.controller.daily_log_controller import daily_log_bp
    app.register_blueprint(daily_log_bp)

    weekly_scheduler = WeeklyGoalScheduler(app, scheduler=scheduler)
    app.extensions["weekly_goal_scheduler"] = weekly_scheduler
    if app.config.get("SCHEDULER_ENABLED"):
        weekly_scheduler.start()

    return app
