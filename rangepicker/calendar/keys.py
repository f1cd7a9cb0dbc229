"""Keyboard key codes understood by the calendar views."""

from enum import Enum

from ..utils.logging import get_logger

logger = get_logger(__name__)


class KeyCode(Enum):
    """Key codes for calendar navigation commands."""

    LEFT_ARROW = "left"
    RIGHT_ARROW = "right"
    UP_ARROW = "up"
    DOWN_ARROW = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    ENTER = "enter"
    SPACE = "space"
    ESCAPE = "escape"
    UNKNOWN = "unknown"


# Browser style key names, terminal escape sequences and plain words
_KEY_MAPPINGS = {
    "arrowleft": KeyCode.LEFT_ARROW,
    "left": KeyCode.LEFT_ARROW,
    "\x1b[d": KeyCode.LEFT_ARROW,
    "arrowright": KeyCode.RIGHT_ARROW,
    "right": KeyCode.RIGHT_ARROW,
    "\x1b[c": KeyCode.RIGHT_ARROW,
    "arrowup": KeyCode.UP_ARROW,
    "up": KeyCode.UP_ARROW,
    "\x1b[a": KeyCode.UP_ARROW,
    "arrowdown": KeyCode.DOWN_ARROW,
    "down": KeyCode.DOWN_ARROW,
    "\x1b[b": KeyCode.DOWN_ARROW,
    "home": KeyCode.HOME,
    "\x1b[h": KeyCode.HOME,
    "\x1b[1~": KeyCode.HOME,
    "end": KeyCode.END,
    "\x1b[f": KeyCode.END,
    "\x1b[4~": KeyCode.END,
    "pageup": KeyCode.PAGE_UP,
    "page_up": KeyCode.PAGE_UP,
    "\x1b[5~": KeyCode.PAGE_UP,
    "pagedown": KeyCode.PAGE_DOWN,
    "page_down": KeyCode.PAGE_DOWN,
    "\x1b[6~": KeyCode.PAGE_DOWN,
    "enter": KeyCode.ENTER,
    "\r": KeyCode.ENTER,
    "\n": KeyCode.ENTER,
    "space": KeyCode.SPACE,
    "spacebar": KeyCode.SPACE,
    " ": KeyCode.SPACE,
    "escape": KeyCode.ESCAPE,
    "esc": KeyCode.ESCAPE,
    "\x1b": KeyCode.ESCAPE,
}


def parse_key(key_data: str) -> KeyCode:
    """Translate a key name or raw key sequence into a KeyCode.

    Args:
        key_data: A key name such as ``"ArrowLeft"`` or ``"PageDown"``, or a raw
            terminal sequence such as ``"\\x1b[D"``

    Returns:
        Corresponding KeyCode, ``KeyCode.UNKNOWN`` when not recognized
    """
    if not key_data:
        return KeyCode.UNKNOWN

    # A lone space must not be stripped away
    key = key_data if key_data.isspace() else key_data.strip()
    key_code = _KEY_MAPPINGS.get(key.lower(), KeyCode.UNKNOWN)
    if key_code is KeyCode.UNKNOWN:
        logger.debug(f"Unrecognized key: {key_data!r}")
    return key_code
