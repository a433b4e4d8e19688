from jmap_webmail.core.locks import ReadWriteLock
from jmap_webmail.core.logging import configure_logging, redact_secrets, sanitize_for_log, short_token

__all__ = ["ReadWriteLock", "configure_logging", "redact_secrets", "sanitize_for_log", "short_token"]
