# sessionauth/services/_shared/base.py
from __future__ import annotations

from sessionauth.core import errors as api_errors
from sessionauth.services._shared.errors import ServiceError
from sessionauth.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Hand out read-only and read-write units of work.
    * Translate service errors into HTTP errors at the route boundary.

    Notes
    -----
    - Services never touch the global session; they go through a Unit of Work.
    """

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Create a read-write Unit of Work."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Create a read-only Unit of Work."""
        return SQLAlchemyReadOnlyUnitOfWork()

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map a :class:`ServiceError` to an :class:`~sessionauth.core.errors.APIError`.

        The error's ``status_code`` is kept and its ``kind`` becomes the problem
        ``code``. Anything else is returned untouched for the Flask handlers.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :rtype: Exception
        """
        if isinstance(exc, ServiceError):
            return api_errors.APIError(
                message=str(exc),
                status_code=exc.status_code,
                code=exc.kind.value,
            )
        return exc
