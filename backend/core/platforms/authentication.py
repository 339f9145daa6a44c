"""API token authentication.

Tokens are JWTs signed with ``API_TOKEN_SECRET`` and carry three claims:

- ``role``: ``platform_user`` (the tenant itself) or ``scoped_user`` (an end user).
- ``platform_token``: the tenant's ``Platform.token``.
- ``user_id``: the ``PlatformUser`` id, only for scoped users.

The authenticator resolves the claims into a ``tenancy.callers.Caller`` which
DRF exposes as ``request.user``. It does not send a ``WWW-Authenticate``
challenge, so DRF reports both missing and rejected credentials as 403.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import jwt
from django.conf import settings
from rest_framework import authentication, exceptions

from platforms.models import Platform, PlatformUser
from tenancy.callers import Caller, CallerKind

logger = logging.getLogger(__name__)


def _token_secret() -> str:
    return getattr(settings, "API_TOKEN_SECRET", "") or settings.SECRET_KEY


def _token_algorithms() -> list[str]:
    return list(getattr(settings, "API_TOKEN_ALGORITHMS", ["HS256"]))


def issue_api_token(
    platform: Platform,
    role: CallerKind | str,
    *,
    user: PlatformUser | None = None,
    expires_in: timedelta | None = None,
) -> str:
    role = CallerKind(role)
    if role is CallerKind.SCOPED and user is None:
        raise ValueError("Scoped tokens require a platform user.")
    if user is not None and user.platform_id != platform.id:
        raise ValueError("User does not belong to the platform.")

    now = datetime.now(timezone.utc)
    claims = {
        "role": role.value,
        "platform_token": platform.token,
        "iat": now,
    }
    if user is not None:
        claims["user_id"] = user.id
    if expires_in is not None:
        claims["exp"] = now + expires_in

    return jwt.encode(claims, _token_secret(), algorithm=_token_algorithms()[0])


def decode_api_token(token: str) -> dict:
    try:
        claims = jwt.decode(
            token,
            _token_secret(),
            algorithms=_token_algorithms(),
            leeway=getattr(settings, "API_TOKEN_LEEWAY_SECONDS", 0),
            options={"require": ["role", "platform_token"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise exceptions.AuthenticationFailed("API token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise exceptions.AuthenticationFailed("Invalid API token.") from exc

    if not isinstance(claims, dict):
        raise exceptions.AuthenticationFailed("Invalid API token.")
    return claims


def resolve_caller(claims: dict) -> Caller:
    """Build the request caller from decoded token claims."""

    try:
        role = CallerKind(claims.get("role"))
    except ValueError:
        raise exceptions.AuthenticationFailed("Unknown API token role.") from None

    platform = (
        Platform.objects.filter(token=str(claims.get("platform_token") or ""), is_active=True)
        .only("id")
        .first()
    )
    if platform is None:
        raise exceptions.AuthenticationFailed("Unknown platform.")

    if role is CallerKind.PLATFORM:
        return Caller(id=platform.id, kind=CallerKind.PLATFORM)

    try:
        user_id = int(claims.get("user_id"))
    except (TypeError, ValueError):
        raise exceptions.AuthenticationFailed("Invalid user identifier.") from None

    user = (
        PlatformUser.objects.filter(id=user_id, platform=platform, is_active=True)
        .only("id", "platform_id", "address_id")
        .first()
    )
    if user is None:
        raise exceptions.AuthenticationFailed("Unknown user for platform.")

    return Caller(
        id=user.id,
        kind=CallerKind.SCOPED,
        platform_id=user.platform_id,
        owned_address_id=user.address_id,
    )


class PlatformTokenAuthentication(authentication.BaseAuthentication):
    keyword = "Bearer"

    def authenticate(self, request):
        header = authentication.get_authorization_header(request).split()
        if not header or header[0].lower() != self.keyword.lower().encode():
            return None

        if len(header) != 2:
            raise exceptions.AuthenticationFailed("Invalid API token header.")

        try:
            token = header[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed("Invalid API token header.") from None

        try:
            caller = resolve_caller(decode_api_token(token))
        except exceptions.AuthenticationFailed as exc:
            logger.warning(
                "api token rejected",
                extra={"reason": str(exc.detail), "path": request.path},
            )
            raise

        return caller, token
