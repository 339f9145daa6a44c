"""Tenant visibility for addresses.

A platform-level caller sees the addresses of the tenant it represents (its own
id is the tenant id). Any other caller sees every address of its own tenant.
Records outside this scope must look exactly like records that do not exist.
"""

from __future__ import annotations

from typing import Optional

from django.db.models import Q, QuerySet

from addresses.models import Address
from tenancy.callers import Caller


def scope_platform_id(caller: Caller) -> Optional[int]:
    if caller.is_platform_level:
        return caller.id
    return caller.platform_id


def visibility_filter(caller: Caller) -> Q:
    platform_id = scope_platform_id(caller)
    if platform_id is None:
        # pk__in=[] never matches; an unscoped caller sees nothing.
        return Q(pk__in=[])
    return Q(platform_id=platform_id)


def is_visible(caller: Caller, record) -> bool:
    platform_id = scope_platform_id(caller)
    return platform_id is not None and record.platform_id == platform_id


def scoped_addresses(caller: Caller, queryset: QuerySet | None = None) -> QuerySet:
    if queryset is None:
        queryset = Address.objects.all()
    return queryset.filter(visibility_filter(caller))
