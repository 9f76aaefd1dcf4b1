"""In-memory consent registry and permission checks."""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterable

from open_finance.exceptions import ForbiddenError
from open_finance.models.financial.enums import ConsentStatus, Permission

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Consent:
    """A customer's grant letting an organization read some of their data."""

    consent_id: str
    organization_id: str
    permissions: frozenset[str]
    status: ConsentStatus = ConsentStatus.AUTHORISED
    expires_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_active(self, now: datetime) -> bool:
        if self.status is not ConsentStatus.AUTHORISED:
            return False
        return self.expires_at is None or now < self.expires_at


class InMemoryConsentRegistry:
    """Consent store answering the pipeline's consent and permission gates.

    Unknown consent ids are treated as invalid and as holding no
    permissions.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._consents: dict[str, Consent] = {}
        self._lock = threading.Lock()

    def grant(
        self,
        consent_id: str,
        organization_id: str,
        permissions: Iterable[Permission | str],
        expires_at: datetime | None = None,
        status: ConsentStatus = ConsentStatus.AUTHORISED,
    ) -> Consent:
        """Register (or replace) a consent."""
        consent = Consent(
            consent_id=consent_id,
            organization_id=organization_id,
            permissions=frozenset(
                p.value if isinstance(p, Permission) else str(p) for p in permissions
            ),
            status=status,
            expires_at=expires_at,
        )
        with self._lock:
            self._consents[consent_id] = consent
        logger.debug("Consent %s registered with status %s", consent_id, status.value)
        return consent

    def revoke(self, consent_id: str) -> None:
        with self._lock:
            consent = self._consents.get(consent_id)
            if consent is None:
                return
            self._consents[consent_id] = Consent(
                consent_id=consent.consent_id,
                organization_id=consent.organization_id,
                permissions=consent.permissions,
                status=ConsentStatus.REVOKED,
                expires_at=consent.expires_at,
                created_at=consent.created_at,
            )

    def get(self, consent_id: str) -> Consent | None:
        with self._lock:
            return self._consents.get(consent_id)

    def is_valid(self, consent_id: str) -> bool:
        consent = self.get(consent_id)
        return consent is not None and consent.is_active(self._clock())

    def has_permission(self, consent_id: str, permission: Permission | str) -> bool:
        consent = self.get(consent_id)
        if consent is None:
            return False
        name = permission.value if isinstance(permission, Permission) else permission
        return name in consent.permissions


class PermissionValidator:
    """Turn a permission lookup into a ``ForbiddenError``."""

    def validate(self, has_permission: bool, required: Permission | str) -> None:
        if not has_permission:
            name = required.value if isinstance(required, Permission) else required
            raise ForbiddenError(f"Required permission not granted: {name}")

    def validate_accounts_read(self, has_permission: bool) -> None:
        self.validate(has_permission, Permission.ACCOUNTS_READ)
