from __future__ import annotations

import logging
import threading
from typing import Callable, FrozenSet, Optional

from ..core.enums import AuthEvent, Role
from ..core.exceptions import ProfileLoadError
from ..profiles.model import NO_ROLE, Profile, Resolution
from ..profiles.resolver import RoleResolver
from .model import AuthSession, Identity
from .service import AuthClient

logger = logging.getLogger(__name__)


def resolve_portal_role(identity: Optional[Identity], resolution: Resolution, admin_emails: FrozenSet[str] = frozenset()) -> Optional[Role]:
    """Role used for portal access: the resolved role, else admin for configured emails."""
    if resolution.role is not None:
        return resolution.role
    if identity is not None and identity.email.lower() in admin_emails:
        return Role.ADMIN
    return None


class SessionContext:
    """Signed-in user's identity, role and profile, kept in step with the auth client.

    Lifecycle: `start()` once, then every auth event is observed; `close()`
    tears it down. Role resolution runs only when the identity changes, and a
    resolution that was overtaken by a newer one is dropped.
    """

    def __init__(self, auth: AuthClient, resolver: RoleResolver, *, admin_emails: FrozenSet[str] = frozenset()):
        self._auth = auth
        self._resolver = resolver
        self._admin_emails = frozenset(admin_emails)
        self._lock = threading.Lock()
        self._generation = 0
        self._unsubscribe: Optional[Callable[[], None]] = None

        self.identity: Optional[Identity] = None
        self.resolution: Resolution = NO_ROLE
        self.loading = True
        self.load_error: Optional[str] = None

    @property
    def role(self) -> Optional[Role]:
        return self.resolution.role

    @property
    def portal_role(self) -> Optional[Role]:
        return resolve_portal_role(self.identity, self.resolution, self._admin_emails)

    @property
    def profile(self) -> Optional[Profile]:
        return self.resolution.profile

    @property
    def started(self) -> bool:
        return self._unsubscribe is not None

    def start(self) -> "SessionContext":
        if self.started:
            return self
        self._unsubscribe = self._auth.on_auth_state_change(self._on_auth_change)
        self._apply(self._auth.get_session())
        return self

    def close(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None
        self._clear()

    def sign_in(self, email: str, password: str) -> AuthSession:
        self.start()
        return self._auth.sign_in(email, password)

    def sign_out(self) -> None:
        self._auth.sign_out()

    def reload(self) -> None:
        """Run resolution again for the current identity (e.g. after a failure)."""
        if self.identity is not None:
            self._resolve(self.identity)

    def _on_auth_change(self, event: AuthEvent, session: Optional[AuthSession]) -> None:
        logger.debug("Auth event %s", event.value)
        self._apply(session)

    def _apply(self, session: Optional[AuthSession]) -> None:
        identity = session.identity if session else None
        if identity is None:
            self._clear()
            return

        if identity == self.identity and not self.loading and self.load_error is None:
            return

        self.identity = identity
        self._resolve(identity)

    def _clear(self) -> None:
        with self._lock:
            self._generation += 1
            self.identity = None
            self.resolution = NO_ROLE
            self.load_error = None
            self.loading = False

    def _resolve(self, identity: Identity) -> None:
        with self._lock:
            self._generation += 1
            generation = self._generation
            self.loading = True

        error: Optional[str] = None
        try:
            result = self._resolver.resolve(identity)
        except ProfileLoadError as e:
            logger.error("Error fetching profile for %s: %s", identity.email, e)
            result, error = NO_ROLE, str(e)

        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding stale profile for %s", identity.email)
                return
            self.resolution = result
            self.load_error = error
            self.loading = False
