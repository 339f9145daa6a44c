from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class CallerKind(str, enum.Enum):
    """Role carried in the API token."""

    PLATFORM = "platform_user"
    SCOPED = "scoped_user"


@dataclass(frozen=True)
class Caller:
    """Identity resolved for a single request.

    A platform-level caller is the tenant itself: its `id` is the tenant id and
    `platform_id` stays empty. A scoped caller is an end user of a tenant and may
    personally own one address (`owned_address_id`).
    """

    id: int
    kind: CallerKind
    platform_id: Optional[int] = None
    owned_address_id: Optional[int] = None

    @property
    def is_platform_level(self) -> bool:
        return self.kind is CallerKind.PLATFORM

    # Read by rest_framework.permissions.IsAuthenticated.
    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_anonymous(self) -> bool:
        return False

    def __str__(self):
        return f"{self.kind.value}:{self.id}"
