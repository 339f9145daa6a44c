from django.db import models

BLANK_MESSAGES = {
    "null": "can't be blank",
    "blank": "can't be blank",
}


class Country(models.Model):
    name = models.CharField(max_length=120)
    code = models.CharField(max_length=3, unique=True)

    class Meta:
        ordering = ("name",)
        verbose_name_plural = "Countries"

    def __str__(self):
        return self.name


class State(models.Model):
    country = models.ForeignKey(Country, on_delete=models.CASCADE, related_name="states")
    name = models.CharField(max_length=120)
    code = models.CharField(max_length=10, blank=True, default="")

    class Meta:
        ordering = ("country__name", "name")

    def __str__(self):
        return f"{self.name} ({self.country.code})"


class Address(models.Model):
    platform = models.ForeignKey(
        "platforms.Platform",
        on_delete=models.CASCADE,
        related_name="addresses",
        error_messages=BLANK_MESSAGES,
    )
    country = models.ForeignKey(
        Country,
        on_delete=models.PROTECT,
        related_name="addresses",
        error_messages=BLANK_MESSAGES,
    )
    state = models.ForeignKey(
        State,
        on_delete=models.PROTECT,
        related_name="addresses",
        error_messages=BLANK_MESSAGES,
    )
    external_id = models.CharField(max_length=120, blank=True, default="")
    address_street = models.CharField(max_length=255, blank=True, default="")
    address_number = models.CharField(max_length=30, blank=True, default="")
    address_complement = models.CharField(max_length=255, blank=True, default="")
    address_neighbourhood = models.CharField(max_length=120, blank=True, default="")
    address_city = models.CharField(max_length=120, blank=True, default="")
    address_zip_code = models.CharField(max_length=20, blank=True, default="")
    address_state = models.CharField(max_length=120, blank=True, default="")
    phone_number = models.CharField(max_length=30, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("id",)
        indexes = [
            models.Index(fields=("platform", "external_id"), name="idx_address_platform_ext"),
        ]

    def __str__(self):
        return f"Address #{self.pk} ({self.platform_id})"
