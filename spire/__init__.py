"""Spire Python Client.

A Python client for the Spire REST API that transparently collects paged
collections into a single list.

Usage:
    from spire import Credentials, SpireClient, make_root_url

    creds = Credentials("alice", "secret")
    client = SpireClient(make_root_url("spire.example.com", 10880, "companies/acme"))

    # Check the credentials
    client.validate_credentials(creds)

    # Fetch every open order, however many pages it takes
    orders = client.fetch_all("sales/orders", creds, filter={"status": "O"})

    # Line items for a handful of orders, as typed records
    items = client.fetch_order_items(creds, ["00001", "00002"], record_type=SalesOrderItem)

    # Create and delete orders
    client.create_sales_order(creds, {"customer": {"customerNo": "C0001"}})
    client.delete_sales_orders(creds, [101, 102])
"""

from .client import SpireClient
from .config import DEFAULT_TIMEOUT, PAGE_SIZE, make_root_url
from .exceptions import (
    APIError,
    ConnectionError,
    OrderDeletionError,
    SerializationError,
    SpireError,
)
from .filters import any_of, encode_filter
from .types import Credentials, PageResponse, SalesOrderItem

__version__ = "0.1.0"
__all__ = [
    "SpireClient",
    "Credentials",
    "PageResponse",
    "SalesOrderItem",
    "encode_filter",
    "any_of",
    "make_root_url",
    "DEFAULT_TIMEOUT",
    "PAGE_SIZE",
    "SpireError",
    "ConnectionError",
    "SerializationError",
    "APIError",
    "OrderDeletionError",
]
