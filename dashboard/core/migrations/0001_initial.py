"""Initial schema for the weather cache table."""
from __future__ import annotations

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CachedWeather",
            fields=[
                ("key", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("latitude", models.FloatField()),
                ("longitude", models.FloatField()),
                ("payload", models.TextField()),
                ("timestamp", models.DateTimeField()),
            ],
            options={
                "db_table": "weather_cache",
            },
        ),
    ]
