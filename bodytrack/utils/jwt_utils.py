from flask_jwt_extended import get_jwt_identity

from bodytrack.extensions import db
from bodytrack.models import User


def get_current_user_id():
    identity = get_jwt_identity()
    try:
        return int(identity)
    except (TypeError, ValueError):
        return None


def get_current_user():
    user_id = get_current_user_id()
    if user_id is None:
        return None
    return db.session.get(User, user_id)
