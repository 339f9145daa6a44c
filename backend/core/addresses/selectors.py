from __future__ import annotations

from addresses.models import Address
from addresses.scope import scoped_addresses
from tenancy.callers import Caller


def list_visible_addresses(*, caller: Caller):
    return scoped_addresses(caller).select_related("country", "state").order_by("id")


def get_visible_address(*, caller: Caller, address_id) -> Address | None:
    """Scoped lookup: out-of-scope and missing ids both come back as None."""

    try:
        address_id = int(address_id)
    except (TypeError, ValueError):
        return None
    return scoped_addresses(caller).filter(pk=address_id).first()
