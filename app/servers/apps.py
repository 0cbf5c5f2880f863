"""
Servers application configuration.

This app provides the access side of the resolution engine:
- Role hierarchy ordering and role management checks
- Effective channel permissions from roles and channel overrides
- Validation of role, role assignment and override records
"""

from django.apps import AppConfig


class ServersConfig(AppConfig):
    """Configuration for the servers application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "servers"
    verbose_name = "Servers"
