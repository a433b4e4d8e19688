"""jmap-webmail: browse a JMAP mail account from a browser session."""

__version__ = "0.1.0"
