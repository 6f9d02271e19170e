# sessionauth/services/auth/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from sessionauth.core.logger import log_event
from sessionauth.models.user import Authority, User
from sessionauth.services._shared.base import BaseService
from sessionauth.services._shared.errors import (
    ConflictError,
    InvalidTokenError,
    NotFoundError,
    SessionStateError,
    TokenMismatchError,
    violates,
)
from sessionauth.services._shared.ports import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    REVOKED_MARKER,
    Authenticator,
    PasswordHasher,
    SessionKeys,
    SessionStore,
    TokenProvider,
)
from sessionauth.services.auth.dto import LoginIn, LogoutIn, ReissueIn, SignUpIn, TokenPairOut

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Token lifecycle service (sign-up / login / reissue / logout / role grant).

    Per identity the session moves through::

        NoSession --login--> HasRefreshToken --reissue--> HasRefreshToken(new)
        HasRefreshToken --logout--> NoSession

    The refresh entry ``RT:<identity>`` holds the only refresh token the
    identity may reissue with; login and reissue overwrite it. Logout drops
    it and blacklists the access token until that token would have expired.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        session_store: SessionStore,
        password_hasher: PasswordHasher,
        authenticator: Authenticator,
    ) -> None:
        """
        Initialize the service with its collaborators.

        :param token_provider: Adapter issuing/validating signed tokens.
        :param session_store: Key-value store with TTL (refresh entries and
            revoked markers).
        :param password_hasher: One-way hasher used on sign-up.
        :param authenticator: Credential verifier used on login.
        """
        self.tokens = token_provider
        self.store = session_store
        self.hasher = password_hasher
        self.authenticator = authenticator

    # ------------------------------------------------------------------ #
    # Sign-up
    # ------------------------------------------------------------------ #

    def sign_up(self, dto: SignUpIn) -> None:
        """
        Create a user with the default ``ROLE_USER`` role.

        :raises ConflictError: If the username is already taken.
        """
        with self.rw_uow() as uow:
            if uow.users.exists_by_username(dto.username):
                raise ConflictError("User", f"username '{dto.username}' already exists")

            user = User(
                username=dto.username,
                password_hash=self.hasher.hash(dto.password),
                phone=dto.phone,
                email=dto.email,
            )
            user.add_role(Authority.USER)
            try:
                uow.users.add(user)
            except IntegrityError as exc:
                # Lost a race against a concurrent sign-up for the same name.
                if violates(exc, "uq_users_username", "users.username"):
                    raise ConflictError(
                        "User", f"username '{dto.username}' already exists"
                    ) from exc
                raise

        log_event(log, "auth.sign_up", identity=dto.username)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> TokenPairOut:
        """
        Authenticate and open a session.

        :raises NotFoundError: If no user has ``dto.username``; nothing is
            written to the session store.
        :raises AuthenticationError: Propagated unchanged from the authenticator.
        """
        with self.ro_uow() as uow:
            if not uow.users.exists_by_username(dto.username):
                raise NotFoundError("User", dto.username)

        identity = self.authenticator.authenticate(dto.username, dto.password)
        info = self.tokens.issue(identity)
        self.store.set(SessionKeys.refresh(identity.name), info.refresh_token, info.refresh_token_ttl)

        log_event(log, "auth.login", identity=identity.name)
        return TokenPairOut.from_token_info(info)

    # ------------------------------------------------------------------ #
    # Reissue
    # ------------------------------------------------------------------ #

    def reissue(self, dto: ReissueIn) -> TokenPairOut:
        """
        Exchange the current refresh token for a new pair.

        The identity comes from the access token, which may be expired but
        must be a well-formed access token. The stored refresh entry is
        overwritten, so the presented refresh token cannot be used again.

        :raises InvalidTokenError: If the refresh token fails validation
            (checked before any store access) or the access slot does not hold
            a well-formed access token.
        :raises SessionStateError: If the identity has no refresh entry.
        :raises TokenMismatchError: If the stored refresh token differs.
        """
        if not self.tokens.validate(dto.refresh_token, expected_type=REFRESH_TOKEN_TYPE):
            raise InvalidTokenError("Refresh token is invalid.")

        identity = self.tokens.identity_of(dto.access_token, expected_type=ACCESS_TOKEN_TYPE)
        key = SessionKeys.refresh(identity.name)

        stored = self.store.get(key)
        if stored is None:
            log_event(log, "auth.reissue.no_session", level=logging.WARNING, identity=identity.name)
            raise SessionStateError()
        if stored != dto.refresh_token:
            log_event(log, "auth.reissue.mismatch", level=logging.WARNING, identity=identity.name)
            raise TokenMismatchError()

        info = self.tokens.issue(identity)
        self.store.set(key, info.refresh_token, info.refresh_token_ttl)

        log_event(log, "auth.reissue", identity=identity.name)
        return TokenPairOut.from_token_info(info)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Close the session and blacklist the access token.

        :raises InvalidTokenError: If the access token fails validation.
        """
        token = dto.access_token
        if not self.tokens.validate(token, expected_type=ACCESS_TOKEN_TYPE):
            raise InvalidTokenError("Access token is invalid.")

        identity = self.tokens.identity_of(token, expected_type=ACCESS_TOKEN_TYPE)
        key = SessionKeys.refresh(identity.name)
        if self.store.get(key) is not None:
            self.store.delete(key)

        self.store.set(SessionKeys.revoked(token), REVOKED_MARKER, self.tokens.remaining_ttl(token))
        log_event(log, "auth.logout", identity=identity.name)

    def is_access_token_revoked(self, access_token: str) -> bool:
        """Return ``True`` when ``access_token`` was blacklisted by a logout."""
        try:
            key = SessionKeys.revoked(access_token)
        except ValueError:
            return False
        return self.store.get(key) is not None

    # ------------------------------------------------------------------ #
    # Role grant
    # ------------------------------------------------------------------ #

    def grant_admin_role(self, identity: str | None) -> None:
        """
        Append ``ROLE_ADMIN`` to the user's roles.

        Repeated grants append again; roles are not deduplicated.

        :param identity: Username of the user to elevate.
        :raises NotFoundError: If ``identity`` is empty or unknown.
        """
        if not identity:
            raise NotFoundError("User", "<anonymous>")

        with self.rw_uow() as uow:
            user = uow.users.get_by_username(identity)
            if user is None:
                raise NotFoundError("User", identity)
            user.add_role(Authority.ADMIN)
            uow.users.flush()

        log_event(log, "auth.grant_admin", identity=identity)
