from __future__ import annotations

import logging
import secrets
import uuid
from datetime import datetime
from typing import Callable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import AuthEvent
from ..core.exceptions import AuthenticationError, NotAuthenticatedError, ValidationError
from .model import AuthSession, Identity
from .repository import AccountRepository

logger = logging.getLogger(__name__)

AuthListener = Callable[[AuthEvent, Optional[AuthSession]], None]


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AuthClient:
    """Identity provider client holding one user agent's current session.

    Listeners registered with `on_auth_state_change` are told about every
    session transition (sign-in, sign-out, token refresh).
    """

    def __init__(self, accounts: AccountRepository, *, clock: Callable[[], datetime] = datetime.now):
        self._accounts = accounts
        self._clock = clock
        self._session: Optional[AuthSession] = None
        self._listeners: list[AuthListener] = []

    def get_session(self) -> Optional[AuthSession]:
        return self._session

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: AuthEvent) -> None:
        for listener in list(self._listeners):
            listener(event, self._session)

    def _issue(self, identity: Identity) -> AuthSession:
        return AuthSession(identity=identity, access_token=secrets.token_urlsafe(32), issued_at=self._clock())

    def sign_up(self, email: str, password: str) -> Identity:
        email = normalize_email(require_non_empty(email, "Email"))
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._accounts.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        user_id = str(uuid.uuid4())
        self._accounts.create(user_id=user_id, email=email, password_hash=generate_password_hash(password))
        logger.info("Account created for %s", email)
        return Identity(user_id=user_id, email=email)

    def sign_in(self, email: str, password: str) -> AuthSession:
        account = self._accounts.get_by_email(normalize_email(email))
        if not account:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(account.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        self._session = self._issue(account.identity)
        self._emit(AuthEvent.SIGNED_IN)
        return self._session

    def refresh_session(self) -> AuthSession:
        if self._session is None:
            raise NotAuthenticatedError("No active session")

        self._session = self._issue(self._session.identity)
        self._emit(AuthEvent.TOKEN_REFRESHED)
        return self._session

    def sign_out(self) -> None:
        self._session = None
        self._emit(AuthEvent.SIGNED_OUT)
