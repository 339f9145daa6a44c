import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("addresses", "0001_initial"),
        ("platforms", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="platformuser",
            name="address",
            field=models.OneToOneField(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="owner",
                to="addresses.address",
            ),
        ),
    ]
