"""
Normalizers for loosely typed option values.

CLI flags arrive as strings (or True for a bare flag); config files may carry
strings, numbers, booleans or lists. These helpers turn either into the types
CaptureOptions expects.
"""

from .capture_config import IframeMode


TRUE_STRINGS = {'true', '1', 'yes', 'on'}
FALSE_STRINGS = {'false', '0', 'no', 'off'}


def to_selector_list(value) -> list[str]:
    """Split comma-separated selectors (or clean a list of them)."""
    if isinstance(value, (list, tuple)):
        return [str(token).strip() for token in value if str(token).strip()]
    if isinstance(value, str):
        return [token.strip() for token in value.split(',') if token.strip()]
    return []


def resolve_boolean(value, fallback: bool = False) -> bool:
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
    return bool(value)


def resolve_follow_iframe_mode(value) -> IframeMode:
    """Map true/false/auto (string or bool) to an IframeMode."""
    if value is None:
        return IframeMode.AUTO
    if isinstance(value, IframeMode):
        return value
    if isinstance(value, bool):
        return IframeMode.FOLLOW if value else IframeMode.SKIP
    if isinstance(value, str):
        lowered = value.strip().lower()
        for mode in IframeMode:
            if mode.value == lowered:
                return mode
    raise ValueError(f"Invalid follow-iframe value: {value!r} (use true, false or auto)")


def ensure_number(value, fallback: int | None) -> int | None:
    """Coerce value to int, returning fallback when it is not numeric."""
    if value is None or isinstance(value, bool):
        return fallback
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return fallback
