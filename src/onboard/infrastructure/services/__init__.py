"""Outbound services (email)."""

from onboard.infrastructure.services.notification_dispatcher import (
    NotificationDispatcher,
    build_activation_url,
)

__all__ = ["NotificationDispatcher", "build_activation_url"]
