import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies: list[tuple[str, str]] = []

    operations = [
        migrations.CreateModel(
            name="EmailLog",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("to", models.EmailField(db_index=True, max_length=254)),
                ("subject", models.TextField(db_index=True)),
                ("sent_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("test_only", models.BooleanField(db_index=True, default=False)),
                ("compressed_body", models.BinaryField(blank=True, null=True)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["to", "sent_at", "test_only"], name="ix_emaillog_to_sentat_testonly")
                ],
            },
        ),
    ]
