from sessionauth.models.user import Authority, User, UserRole

__all__ = [
    "Authority",
    "User",
    "UserRole",
]
