from .mail_service import MailService, NotificationDispatcher, get_notification_dispatcher, render

__all__ = [
    "MailService",
    "NotificationDispatcher",
    "get_notification_dispatcher",
    "render",
]
