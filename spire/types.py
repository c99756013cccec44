"""Type definitions for the Spire client."""

import base64
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

from .exceptions import SerializationError

T = TypeVar("T")


@dataclass(frozen=True)
class Credentials:
    """Username/password pair sent with every request.

    Nothing is validated; empty values are encoded as-is.
    """

    username: str
    password: str = field(repr=False)

    def basic_auth_header(self) -> str:
        """Return the value of the HTTP Basic ``Authorization`` header."""
        token = base64.b64encode(
            f"{self.username}:{self.password}".encode()
        ).decode()
        return f"Basic {token}"


def decode_record(raw: dict[str, Any], record_type: Callable[..., T] | None) -> Any:
    """Decode one raw JSON record into ``record_type``.

    ``None`` keeps the plain dictionary. Types exposing ``from_dict`` are
    built with it, anything else is called with the record's keys.
    """
    if not isinstance(raw, dict):
        raise SerializationError(
            f"Error decoding record: expected an object, got {type(raw).__name__}"
        )
    if record_type is None:
        return raw
    try:
        from_dict = getattr(record_type, "from_dict", None)
        if from_dict is not None:
            return from_dict(raw)
        return record_type(**raw)
    except (TypeError, KeyError, ValueError, AttributeError) as e:
        name = getattr(record_type, "__name__", repr(record_type))
        raise SerializationError(f"Error decoding record into {name}: {e}") from e


@dataclass
class PageResponse(Generic[T]):
    """One page of a collection response.

    ``count`` is the total number of matching records across all pages,
    not the size of ``records``.
    """

    records: list[T] = field(default_factory=list)
    count: int = 0

    @classmethod
    def from_response(
        cls,
        response: Any,
        record_type: Callable[..., T] | None = None,
    ) -> "PageResponse[T]":
        """Create PageResponse from a decoded JSON body."""
        if not isinstance(response, dict):
            raise SerializationError(
                f"Error unmarshaling JSON: expected an object, got {type(response).__name__}"
            )

        raw_records = response.get("records") or []
        if not isinstance(raw_records, list):
            raise SerializationError("Error unmarshaling JSON: 'records' is not a list")

        try:
            count = int(response.get("count") or 0)
        except (TypeError, ValueError, OverflowError) as e:
            raise SerializationError(f"Error unmarshaling JSON: invalid count: {e}") from e

        return cls(
            records=[decode_record(r, record_type) for r in raw_records],
            count=count,
        )


@dataclass
class SalesOrderItem:
    """A line item belonging to a sales order."""

    id: int | None
    order_no: str
    part_no: str
    description: str = ""
    order_qty: float = 0.0
    unit_price: float = 0.0
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SalesOrderItem":
        """Create SalesOrderItem from a sales item record."""
        inventory = data.get("inventory") or {}
        return cls(
            id=data.get("id"),
            order_no=data["orderNo"],
            part_no=data.get("partNo") or inventory.get("partNo", ""),
            description=data.get("description") or "",
            order_qty=float(data.get("orderQty") or 0),
            unit_price=float(data.get("unitPrice") or 0),
            raw=data,
        )
