"""Unit of Work abstractions and the SQLAlchemy implementations.

Services depend on :class:`UnitOfWork`; the concrete scopes share the
Flask-scoped session so repositories see one transaction.
"""

from .base import UnitOfWork
from .sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

__all__ = [
    "UnitOfWork",
    "SQLAlchemyUnitOfWork",
    "SQLAlchemyReadOnlyUnitOfWork",
]
