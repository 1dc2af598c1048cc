from .logging_config import configure_logging
from .settings import CommitTarget, Settings, get_settings, load_settings, to_target

__all__ = [
    "CommitTarget",
    "Settings",
    "configure_logging",
    "get_settings",
    "load_settings",
    "to_target",
]
