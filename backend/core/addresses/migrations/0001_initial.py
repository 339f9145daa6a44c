import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("platforms", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Country",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("name", models.CharField(max_length=120)),
                ("code", models.CharField(max_length=3, unique=True)),
            ],
            options={
                "ordering": ("name",),
                "verbose_name_plural": "Countries",
            },
        ),
        migrations.CreateModel(
            name="State",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("name", models.CharField(max_length=120)),
                ("code", models.CharField(blank=True, default="", max_length=10)),
                (
                    "country",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="states",
                        to="addresses.country",
                    ),
                ),
            ],
            options={
                "ordering": ("country__name", "name"),
            },
        ),
        migrations.CreateModel(
            name="Address",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("external_id", models.CharField(blank=True, default="", max_length=120)),
                ("address_street", models.CharField(blank=True, default="", max_length=255)),
                ("address_number", models.CharField(blank=True, default="", max_length=30)),
                ("address_complement", models.CharField(blank=True, default="", max_length=255)),
                ("address_neighbourhood", models.CharField(blank=True, default="", max_length=120)),
                ("address_city", models.CharField(blank=True, default="", max_length=120)),
                ("address_zip_code", models.CharField(blank=True, default="", max_length=20)),
                ("address_state", models.CharField(blank=True, default="", max_length=120)),
                ("phone_number", models.CharField(blank=True, default="", max_length=30)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "country",
                    models.ForeignKey(
                        error_messages={"blank": "can't be blank", "null": "can't be blank"},
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="addresses",
                        to="addresses.country",
                    ),
                ),
                (
                    "platform",
                    models.ForeignKey(
                        error_messages={"blank": "can't be blank", "null": "can't be blank"},
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="addresses",
                        to="platforms.platform",
                    ),
                ),
                (
                    "state",
                    models.ForeignKey(
                        error_messages={"blank": "can't be blank", "null": "can't be blank"},
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="addresses",
                        to="addresses.state",
                    ),
                ),
            ],
            options={
                "ordering": ("id",),
                "indexes": [
                    models.Index(
                        fields=["platform", "external_id"], name="idx_address_platform_ext"
                    )
                ],
            },
        ),
    ]
