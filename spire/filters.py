"""Filter expressions for Spire collection queries."""

import json
from typing import Any, Iterable

from .exceptions import SerializationError


def encode_filter(filter: dict[str, Any] | None) -> str:  # noqa: A002
    """Encode a filter mapping for the ``filter`` query parameter.

    An empty or missing filter encodes to ``""``, meaning the parameter is
    omitted.

    Raises:
        SerializationError: If the filter holds values JSON cannot represent.
    """
    if not filter:
        return ""
    try:
        return json.dumps(filter)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to marshal filter to JSON: {e}") from e


def any_of(field: str, values: Iterable[Any]) -> dict[str, Any]:
    """Build an OR filter matching ``field`` against each of ``values``.

    Example:
        >>> any_of("orderNo", ["00001", "00002"])
        {'$or': [{'orderNo': '00001'}, {'orderNo': '00002'}]}
    """
    conditions = [{field: value} for value in values]
    if not conditions:
        raise ValueError(f"any_of() needs at least one value for {field!r}")
    return {"$or": conditions}
