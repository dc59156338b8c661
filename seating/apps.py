"""Seating app configuration."""

from django.apps import AppConfig


class SeatingConfig(AppConfig):
    """Configuration for the seat allocation app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "seating"
    verbose_name = "Seat allocation"
