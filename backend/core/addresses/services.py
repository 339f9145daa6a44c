from __future__ import annotations

import logging
from dataclasses import dataclass, field

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import ProtectedError, RestrictedError

from addresses.models import Address
from addresses.policies import (
    ACTION_CREATE,
    ACTION_DESTROY,
    ACTION_UPDATE,
    Decision,
    authorize,
    permitted_attributes,
)
from addresses.scope import scope_platform_id
from addresses.selectors import get_visible_address
from addresses.serializers import AddressWriteSerializer
from tenancy.callers import Caller

logger = logging.getLogger(__name__)

MISSING_PAYLOAD_ERRORS = {"address": ["This field is required."]}


@dataclass(frozen=True)
class AddressOutcome:
    decision: Decision
    address: Address | None = None
    address_id: int | None = None
    errors: dict = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.decision is Decision.ALLOWED and not self.errors


def _validation_errors(exc: ValidationError) -> dict[str, list[str]]:
    try:
        detail = exc.message_dict
    except (AttributeError, TypeError):
        return {"base": list(exc.messages)}
    return {key: list(messages) for key, messages in detail.items()}


def _write_attributes(payload: dict) -> tuple[dict, dict]:
    """Allow-list and type-cast a write payload into model attributes."""

    serializer = AddressWriteSerializer(data=permitted_attributes(payload), partial=True)
    if not serializer.is_valid():
        errors = {
            key: [str(message) for message in messages]
            for key, messages in serializer.errors.items()
        }
        return {}, errors
    return dict(serializer.validated_data), {}


def _assign_attributes(address: Address, attributes: dict) -> None:
    for attname, value in attributes.items():
        model_field = address._meta.get_field(attname)
        if value is None and not model_field.null and model_field.has_default():
            value = model_field.get_default()
        setattr(address, attname, value)


def save_address(address: Address) -> tuple[bool, dict]:
    """Run the address' own validations, then persist it."""

    try:
        address.full_clean()
    except ValidationError as exc:
        return False, _validation_errors(exc)

    with transaction.atomic():
        address.save()
    return True, {}


def delete_address(address: Address) -> tuple[bool, dict]:
    try:
        with transaction.atomic():
            address.delete()
    except (ProtectedError, RestrictedError) as exc:
        return False, {"base": [str(exc.args[0])]}
    return True, {}


def _log_forbidden(caller: Caller, action: str, address: Address) -> None:
    logger.warning(
        "address action forbidden",
        extra={
            "action": action,
            "caller_kind": caller.kind.value,
            "caller_id": caller.id,
            "address_id": address.pk,
            "address_platform_id": address.platform_id,
        },
    )


def _log_invalid(action: str, address: Address, errors: dict) -> None:
    logger.info(
        "address validation failed",
        extra={"action": action, "address_id": address.pk, "fields": sorted(errors)},
    )


def create_address(*, caller: Caller, payload: dict) -> AddressOutcome:
    # The candidate starts inside the caller's scope; a submitted platform_id
    # (allow-listed, so identical before and after filtering) overrides it and
    # is what the create rule checks.
    attributes, errors = _write_attributes(payload)
    address = Address(platform_id=scope_platform_id(caller))
    _assign_attributes(address, attributes)

    decision = authorize(caller, address, ACTION_CREATE)
    if decision is not Decision.ALLOWED:
        _log_forbidden(caller, ACTION_CREATE, address)
        return AddressOutcome(decision=decision)

    if not errors:
        _, errors = save_address(address)
    if errors:
        _log_invalid(ACTION_CREATE, address, errors)
        return AddressOutcome(decision=decision, address=address, errors=errors)

    logger.info(
        "address created",
        extra={
            "address_id": address.pk,
            "platform_id": address.platform_id,
            "caller": str(caller),
        },
    )
    return AddressOutcome(decision=decision, address=address, address_id=address.pk)


def update_address(*, caller: Caller, address_id, payload: dict | None) -> AddressOutcome:
    address = get_visible_address(caller=caller, address_id=address_id)
    if address is None:
        return AddressOutcome(decision=Decision.NOT_FOUND)

    decision = authorize(caller, address, ACTION_UPDATE)
    if decision is not Decision.ALLOWED:
        _log_forbidden(caller, ACTION_UPDATE, address)
        return AddressOutcome(decision=decision)

    if not payload:
        return AddressOutcome(
            decision=decision,
            address=address,
            address_id=address.pk,
            errors=dict(MISSING_PAYLOAD_ERRORS),
        )

    attributes, errors = _write_attributes(payload)
    if not errors:
        _assign_attributes(address, attributes)
        _, errors = save_address(address)
    if errors:
        _log_invalid(ACTION_UPDATE, address, errors)
        return AddressOutcome(
            decision=decision, address=address, address_id=address.pk, errors=errors
        )

    logger.info(
        "address updated",
        extra={
            "address_id": address.pk,
            "platform_id": address.platform_id,
            "caller": str(caller),
        },
    )
    return AddressOutcome(decision=decision, address=address, address_id=address.pk)


def destroy_address(*, caller: Caller, address_id) -> AddressOutcome:
    address = get_visible_address(caller=caller, address_id=address_id)
    if address is None:
        return AddressOutcome(decision=Decision.NOT_FOUND)

    decision = authorize(caller, address, ACTION_DESTROY)
    if decision is not Decision.ALLOWED:
        _log_forbidden(caller, ACTION_DESTROY, address)
        return AddressOutcome(decision=decision)

    # delete() clears the pk on the instance.
    deleted_id = address.pk
    deleted, errors = delete_address(address)
    if not deleted:
        logger.warning(
            "address delete failed",
            extra={"address_id": deleted_id, "caller": str(caller)},
        )
        return AddressOutcome(
            decision=decision, address=address, address_id=deleted_id, errors=errors
        )

    logger.info("address deleted", extra={"address_id": deleted_id, "caller": str(caller)})
    return AddressOutcome(decision=decision, address_id=deleted_id)
