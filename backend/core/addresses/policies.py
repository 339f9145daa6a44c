"""Authorization rules for address writes.

Every rule is a plain function of the caller and a record; nothing here reads
storage. `authorize` returns a `Decision` instead of raising, so views can map
the outcome to a response explicitly.
"""

from __future__ import annotations

import enum
from typing import Any, Callable, Mapping

from tenancy.callers import Caller

ACTION_CREATE = "create"
ACTION_UPDATE = "update"
ACTION_DESTROY = "destroy"

WRITABLE_FIELDS = frozenset(
    (
        "platform_id",
        "country_id",
        "state_id",
        "external_id",
        "address_street",
        "address_number",
        "address_complement",
        "address_neighbourhood",
        "address_city",
        "address_zip_code",
        "address_state",
        "phone_number",
    )
)


class Decision(str, enum.Enum):
    ALLOWED = "allowed"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


def can_create(caller: Caller, record) -> bool:
    return caller.is_platform_level or record.platform_id == caller.platform_id


def can_update(caller: Caller, record) -> bool:
    if caller.is_platform_level:
        return True
    return caller.owned_address_id is not None and caller.owned_address_id == record.id


can_destroy = can_update


ACTION_RULES: dict[str, Callable[[Caller, Any], bool]] = {
    ACTION_CREATE: can_create,
    ACTION_UPDATE: can_update,
    ACTION_DESTROY: can_destroy,
}


def writable_fields() -> frozenset:
    return WRITABLE_FIELDS


def permitted_attributes(payload: Mapping[str, Any] | None) -> dict[str, Any]:
    """Keep only allow-listed keys; everything else is dropped silently."""

    if not payload:
        return {}
    return {key: value for key, value in payload.items() if key in WRITABLE_FIELDS}


def authorize(caller: Caller, record, action: str) -> Decision:
    try:
        rule = ACTION_RULES[action]
    except KeyError:
        raise ValueError(f"Unknown address action '{action}'.") from None
    return Decision.ALLOWED if rule(caller, record) else Decision.FORBIDDEN
