from jmap_webmail.services.webmail import WebmailService

__all__ = ["WebmailService"]
