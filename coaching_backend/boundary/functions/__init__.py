"""
Notification function boundary.

Exports: NotificationClient and the function names it invokes
"""

from .notification_client import (
    CONTACT_FORM_FUNCTION,
    COURSE_REGISTRATION_NOTIFICATION,
    GROUP_REGISTRATION_NOTIFICATION,
    NotificationClient,
)

__all__ = [
    "CONTACT_FORM_FUNCTION",
    "COURSE_REGISTRATION_NOTIFICATION",
    "GROUP_REGISTRATION_NOTIFICATION",
    "NotificationClient",
]
