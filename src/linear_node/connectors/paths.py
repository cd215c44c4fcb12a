"""Safe navigation over decoded JSON responses.

Paths are dot-delimited (``data.issue.team.id``). Literal dots inside a
key cannot be escaped.
"""

from collections.abc import Mapping
from typing import Any


class _Absent:
    """Marker for a path that could not be followed."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Any = _Absent()


def extract(response: Any, path: str) -> Any:
    """Return the value at ``path`` in ``response``, or ``ABSENT``.

    Each segment must name a key of a mapping; a missing key or a
    non-mapping intermediate value ends the walk with ``ABSENT``. A present
    ``null`` is returned as ``None``. The empty path returns the response.
    """
    if not path:
        return response

    current = response
    for key in path.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return ABSENT
        current = current[key]
    return current


def extract_or(response: Any, path: str, default: Any = None) -> Any:
    """Like ``extract`` but substitutes ``default`` for ``ABSENT``."""
    value = extract(response, path)
    return default if value is ABSENT else value
