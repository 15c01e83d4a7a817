"""
Celery configuration for the Django application.

Celery runs the background side of the ledger:
- Scheduled ledger reconciliation (django-celery-beat database scheduler)
- Ad hoc reconciliation runs triggered by operators

Tasks are auto-discovered from all installed Django apps.

Usage:
    # Define a task in any app's tasks.py:
    from celery import shared_task

    @shared_task(bind=True)
    def verify_ledger_balances(self, batch_size=None):
        ...

    # Call the task asynchronously:
    verify_ledger_balances.delay()

For more information, see:
https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import os

from celery import Celery

# Set the default Django settings module for the Celery worker
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("numbers_exchange")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

# Celery will look for a tasks.py module in each installed app
app.autodiscover_tasks()
