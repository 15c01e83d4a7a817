"""
Add celery-beat schedule for the hourly ledger reconciliation.

Creates the periodic task that runs verify_ledger_balances, which compares
every account balance with the sum of its ledger entries.
"""

from django.db import migrations

TASK_NAME = "Verify Ledger Balances"


def create_periodic_task(apps, schema_editor):
    """Create the periodic task for ledger reconciliation."""
    IntervalSchedule = apps.get_model("django_celery_beat", "IntervalSchedule")
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    schedule, _ = IntervalSchedule.objects.get_or_create(
        every=1,
        period="hours",
    )

    PeriodicTask.objects.get_or_create(
        name=TASK_NAME,
        defaults={
            "task": "wallets.tasks.verify_ledger_balances",
            "interval": schedule,
            "enabled": True,
            "description": (
                "Compares every account balance with the sum of its ledger "
                "entries and logs any mismatch."
            ),
        },
    )


def remove_periodic_task(apps, schema_editor):
    """Remove the periodic task on migration rollback."""
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    PeriodicTask.objects.filter(name=TASK_NAME).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("wallets", "0001_initial"),
        ("django_celery_beat", "0019_alter_periodictasks_options"),
    ]

    operations = [
        migrations.RunPython(create_periodic_task, remove_periodic_task),
    ]
