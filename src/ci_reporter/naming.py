"""
Name resolution for example groups and examples.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

logger = logging.getLogger(__name__)

UNKNOWN = "UNKNOWN"

_MISSING = object()


def _read(obj: Any, name: str) -> Any:
    """Return an attribute, or _MISSING if it is absent or its accessor raises."""
    try:
        return getattr(obj, name, _MISSING)
    except Exception as e:
        logger.debug("Accessor %s of %r raised %s", name, type(obj), e)
        return _MISSING


def _text(value: Any) -> Optional[str]:
    try:
        return str(value)
    except Exception as e:
        logger.debug("Could not convert %r to a name: %s", type(value), e)
        return None


def _group_description(obj: Any) -> Any:
    metadata = _read(obj, "metadata")
    if not isinstance(metadata, Mapping):
        return _MISSING
    try:
        group = metadata.get("example_group")
        if isinstance(group, Mapping) and group.get("full_description") is not None:
            return group["full_description"]
    except Exception as e:
        logger.debug("Example group metadata of %r unreadable: %s", type(obj), e)
    return _MISSING


def description_for(obj: Any) -> str:
    """
    Resolve a display name for a group or example.

    Tries, in order: ``full_description``, the owning group's
    ``metadata["example_group"]["full_description"]``, ``description``.
    A step whose accessor raises is skipped. Falls back to ``UNKNOWN``;
    never raises.
    """
    candidates = (
        lambda: _read(obj, "full_description"),
        lambda: _group_description(obj),
        lambda: _read(obj, "description"),
    )
    for candidate in candidates:
        value = candidate()
        if value is _MISSING:
            continue
        name = _text(value)
        if name is not None:
            return name

    return UNKNOWN
