# Seeds the project that receives tasks created without one.

from django.conf import settings
from django.db import migrations


def create_default_project(apps, schema_editor):
    Project = apps.get_model("tasks", "Project")
    Project.objects.get_or_create(
        name=settings.DEFAULT_PROJECT_NAME,
        defaults={
            "description": "General office tasks",
            "icon": "briefcase",
        },
    )


class Migration(migrations.Migration):

    dependencies = [
        ("tasks", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(create_default_project, migrations.RunPython.noop),
    ]
