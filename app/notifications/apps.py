"""Django app configuration for notification level resolution."""

from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    """Configuration for the notifications app (no models)."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"
    verbose_name = "Notifications"
