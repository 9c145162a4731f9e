"""Systems package for settings persistence.

`settings` holds the transactional file helpers; `settings_system` wraps them
around GameConfig.
"""

__all__ = [
    "settings",
    "settings_system",
]
