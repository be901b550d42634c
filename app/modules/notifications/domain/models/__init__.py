from .mail import Cases, MailMessage

__all__ = ["Cases", "MailMessage"]
