from .mail_client import HttpMailClient, TransientMailError

__all__ = ["HttpMailClient", "TransientMailError"]
