from forum_auth.persistence.sqlalchemy.models.session_model import SessionModel
from forum_auth.persistence.sqlalchemy.models.user_model import UserModel

__all__ = [
    "SessionModel",
    "UserModel",
]
