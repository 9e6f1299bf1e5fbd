from datetime import date

import pytest
from flask_jwt_extended import create_access_token
from werkzeug.security import generate_password_hash

from bodytrack import create_app
from bodytrack.config import TestConfig
from bodytrack.extensions import db
from bodytrack.models import DailyLog, User


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(email="jane@example.com", password="secret123", **fields):
        with app.app_context():
            user = User(
                name=fields.pop("name", email.split("@")[0]),
                email=email,
                password_hash=generate_password_hash(password),
                **fields
            )
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make_user


@pytest.fixture
def make_log(app):
    def _make_log(user_id, log_date: date, weight=None, calories=(0, 0, 0), protein=(0, 0, 0), sessions=None):
        nutrition = {
            meal: {"calories": cal, "protein": prot, "fat": 0, "carbs": 0}
            for meal, cal, prot in zip(("breakfast", "lunch", "dinner"), calories, protein)
        }
        with app.app_context():
            log = DailyLog(
                user_id=user_id,
                log_date=log_date,
                weight=weight,
                nutrition=nutrition,
                sessions=sessions or [],
            )
            db.session.add(log)
            db.session.commit()
            return log.id
    return _make_log


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user_id):
        with app.app_context():
            token = create_access_token(identity=str(user_id))
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def get_user(app):
    def _get_user(user_id):
        with app.app_context():
            user = db.session.get(User, user_id)
            return user.to_dict() if user else None
    return _get_user
