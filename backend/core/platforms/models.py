import secrets

from django.db import models


def generate_platform_token() -> str:
    return secrets.token_hex(20)


class Platform(models.Model):
    """A tenant. Platform-level API callers act as the platform itself."""

    name = models.CharField(max_length=150)
    token = models.CharField(
        max_length=64,
        unique=True,
        default=generate_platform_token,
        help_text="Identifier carried in API tokens as `platform_token`.",
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("name",)

    def __str__(self):
        return self.name


class PlatformUser(models.Model):
    platform = models.ForeignKey(
        Platform,
        on_delete=models.CASCADE,
        related_name="users",
    )
    email = models.EmailField(blank=True, default="")
    name = models.CharField(max_length=150, blank=True, default="")
    is_active = models.BooleanField(default=True)
    # The single address this user personally owns (may update/destroy).
    address = models.OneToOneField(
        "addresses.Address",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="owner",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("platform__name", "id")

    def __str__(self):
        return f"{self.email or self.pk} @ {self.platform}"
