from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Branch",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("branch_name", models.CharField(max_length=120)),
                ("location", models.CharField(blank=True, default="", max_length=255)),
                ("contact_number", models.CharField(blank=True, default="", max_length=32)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "ordering": ["branch_name", "id"],
                "verbose_name_plural": "Branches",
            },
        ),
    ]
