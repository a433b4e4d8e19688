from jmap_webmail.config.settings import (
    JmapSettings,
    ServerSettings,
    Settings,
    get_settings,
    load_settings,
)

__all__ = ["JmapSettings", "ServerSettings", "Settings", "get_settings", "load_settings"]
