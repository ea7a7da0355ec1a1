"""
Configuration root and suppression markers.

Markers are attached to the decorated class itself; subclasses do not inherit
them.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

CONFIG_MARKER_ATTR = "__liveconf_config__"
DISABLED_MARKER_ATTR = "__liveconf_disabled__"


@dataclass(frozen=True)
class ConfigMarker:
    """Declares a class as a configuration root."""

    name: str = ""
    ignore_disabled: bool = False


def config(
    name: Union[str, type, None] = None,
    *,
    ignore_disabled: bool = False,
) -> Union[type, Callable[[type], type]]:
    """
    Mark a class as a configuration root.

    Usable bare (``@config``) or with arguments
    (``@config("Drive", ignore_disabled=True)``).

    Args:
        name: Exposed name overriding the class name (empty keeps the class name)
        ignore_disabled: Expose the class even when it is marked @disabled

    Returns:
        The class, or a decorator when called with arguments
    """
    if isinstance(name, type):
        setattr(name, CONFIG_MARKER_ATTR, ConfigMarker())
        return name

    marker = ConfigMarker(name=name or "", ignore_disabled=ignore_disabled)

    def decorator(cls: type) -> type:
        setattr(cls, CONFIG_MARKER_ATTR, marker)
        return cls

    return decorator


def disabled(cls: type) -> type:
    """Mark a class as disabled; configuration roots marked this way are skipped."""
    setattr(cls, DISABLED_MARKER_ATTR, True)
    return cls


def get_config_marker(cls: type) -> Optional[ConfigMarker]:
    """Return the ConfigMarker declared on cls itself, if any."""
    marker = vars(cls).get(CONFIG_MARKER_ATTR)
    if isinstance(marker, ConfigMarker):
        return marker
    return None


def is_disabled(cls: type) -> bool:
    return bool(vars(cls).get(DISABLED_MARKER_ATTR, False))
