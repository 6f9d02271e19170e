# sessionauth/services/auth/authenticator.py
from __future__ import annotations

from sessionauth.services._shared.base import BaseService
from sessionauth.services._shared.dto import VerifiedIdentity
from sessionauth.services._shared.errors import AuthenticationError
from sessionauth.services._shared.ports import Authenticator, PasswordHasher


class UserCredentialsAuthenticator(BaseService, Authenticator):
    """
    Verify a username/password pair against the stored user.

    Unknown usernames and wrong passwords fail the same way so callers cannot
    probe for accounts through this port.
    """

    def __init__(self, *, password_hasher: PasswordHasher):
        self.hasher = password_hasher

    def authenticate(self, name: str, plaintext: str) -> VerifiedIdentity:
        with self.ro_uow() as uow:
            user = uow.users.get_by_username(name)
            if user is None or not self.hasher.verify(user.password_hash, plaintext):
                raise AuthenticationError()
            return VerifiedIdentity(name=user.username, roles=tuple(user.roles))
