from .user import UserRecord  # noqa: F401
