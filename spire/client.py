"""Spire HTTP client."""

import json
import logging
from typing import Any, Callable, Iterable, TypeVar

import httpx

from .config import DEFAULT_TIMEOUT, PAGE_SIZE
from .exceptions import (
    APIError,
    ConnectionError,
    OrderDeletionError,
    SerializationError,
    SpireError,
)
from .filters import any_of, encode_filter
from .types import Credentials, PageResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SUCCESS_EMPTY = (httpx.codes.CREATED, httpx.codes.NO_CONTENT)

SALES_ORDERS = "sales/orders"
SALES_ITEMS = "sales/items"


def _status_line(response: httpx.Response) -> str:
    return f"{response.status_code} {response.reason_phrase}".strip()


def _read_detail(response: httpx.Response) -> str:
    try:
        response.read()
        return response.text
    except (httpx.HTTPError, httpx.StreamError) as e:
        return f"<could not read response body: {e}>"


class SpireClient:
    """HTTP client for a Spire server.

    Credentials are not stored on the client; each call takes its own
    :class:`~spire.types.Credentials`, so one client can serve several users.

    Args:
        root_url: API root, e.g. "https://host:10880/api/v2/companies/acme".
        timeout: Timeout in seconds for each individual HTTP exchange.
        page_size: Records requested per page by :meth:`fetch_all`.
        transport: Optional httpx transport for the owned connection pool.

    Example:
        >>> creds = Credentials("alice", "secret")
        >>> with SpireClient(root_url) as client:
        ...     client.validate_credentials(creds)
        ...     orders = client.fetch_all("sales/orders", creds, filter={"status": "O"})
    """

    def __init__(
        self,
        root_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        page_size: int = PAGE_SIZE,
        transport: httpx.BaseTransport | None = None,
    ):
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.root_url = root_url.rstrip("/")
        self.page_size = page_size
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "SpireClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _build_url(self, path: str, params: dict[str, Any] | None = None) -> httpx.URL:
        if path.startswith(("http://", "https://")):
            url = httpx.URL(path)
        else:
            url = httpx.URL(f"{self.root_url}/{path.lstrip('/')}")
        if params:
            url = url.copy_merge_params(params)
        return url

    def _send(
        self,
        method: str,
        url: httpx.URL,
        headers: dict[str, str],
        content: str | None = None,
    ) -> httpx.Response:
        """Send a request and return the response with its body still unread."""
        request = self._client.build_request(method, url, headers=headers, content=content)
        logger.debug(f"{method} {url}")
        return self._client.send(request, stream=True)

    def request(
        self,
        path: str,
        credentials: Credentials,
        method: str = "GET",
        payload: Any = None,
        *,
        params: dict[str, Any] | None = None,
        record_type: Callable[..., T] | None = None,
    ) -> PageResponse[T]:
        """Perform one request against the server.

        Args:
            path: Full URL, or a path relative to the root URL.
            credentials: Sent as a Basic ``Authorization`` header.
            method: HTTP method.
            payload: JSON-serializable body; no body is sent when ``None``.
            params: Extra query parameters, merged into any already in ``path``.
            record_type: Shape for each record; plain dicts when ``None``.

        Returns:
            The decoded page for 200 responses, an empty page for 201 and 204.

        Raises:
            ConnectionError: The server could not be reached, or a 200 body
                could not be read.
            SerializationError: The payload or response body is not valid JSON
                of the expected shape.
            APIError: Any other status code.
        """
        url = self._build_url(path, params)
        headers = {"Authorization": credentials.basic_auth_header()}
        content = None
        if payload is not None:
            try:
                content = json.dumps(payload)
            except (TypeError, ValueError) as e:
                raise SerializationError(f"Failed to marshal payload: {e}") from e
            headers["Content-Type"] = "application/json"

        try:
            response = self._send(method, url, headers, content)
        except httpx.RequestError as e:
            raise ConnectionError(f"Error making request to {url}: {e}") from e

        try:
            if response.status_code in _SUCCESS_EMPTY:
                return PageResponse()
            if response.status_code != httpx.codes.OK:
                raise APIError(
                    _status_line(response), _read_detail(response), response.status_code
                )

            try:
                response.read()
            except httpx.HTTPError as e:
                raise ConnectionError(f"Error reading response from {url}: {e}") from e
        finally:
            response.close()

        try:
            body = response.json()
        except ValueError as e:
            raise SerializationError(f"Error unmarshaling JSON: {e}") from e
        return PageResponse.from_response(body, record_type)

    def validate_credentials(self, credentials: Credentials) -> None:
        """Check credentials by requesting the root URL.

        Only the status code is inspected; the body is not decoded.

        Raises:
            ConnectionError: The server could not be reached.
            APIError: The server answered with anything but 200.
        """
        headers = {"Authorization": credentials.basic_auth_header()}
        try:
            response = self._send("GET", httpx.URL(self.root_url), headers)
        except httpx.RequestError as e:
            raise ConnectionError(f"Error calling Spire validation API: {e}") from e

        try:
            if response.status_code != httpx.codes.OK:
                raise APIError(
                    _status_line(response), _read_detail(response), response.status_code
                )
        finally:
            response.close()

    def fetch_all(
        self,
        endpoint: str,
        credentials: Credentials,
        filter: dict[str, Any] | None = None,  # noqa: A002
        *,
        record_type: Callable[..., T] | None = None,
    ) -> list[T]:
        """Fetch every record of a collection, following ``limit``/``start`` paging.

        The ``count`` of the first page is authoritative. Further pages are
        requested at multiples of ``page_size`` until that many records have
        been collected. A page with no records ends the loop early and the
        records gathered so far are returned.

        Args:
            endpoint: Collection path (or full URL).
            credentials: Sent with every page request.
            filter: Filter expression; omitted from the query when empty.
            record_type: Shape for each record; plain dicts when ``None``.

        Returns:
            All records, in server order.

        Raises:
            SpireError: Any page failed. Records from earlier pages are dropped.
        """
        params: dict[str, Any] = {"limit": self.page_size}
        encoded = encode_filter(filter)
        if encoded:
            params["filter"] = encoded

        first = self.request(
            endpoint, credentials, params=params, record_type=record_type
        )
        records = list(first.records)
        count = first.count
        if count <= self.page_size:
            return records

        logger.info(
            f"Fetching {count} records from {endpoint} in pages of {self.page_size}"
        )
        start = self.page_size
        pages = 1
        while len(records) < count:
            params["start"] = start
            try:
                page = self.request(
                    endpoint, credentials, params=params, record_type=record_type
                )
            except SpireError as e:
                logger.error(f"Error fetching {endpoint} starting at {start}: {e}")
                raise
            pages += 1
            logger.debug(f"Fetched {len(page.records)} records at offset {start}")

            if not page.records:
                logger.warning(
                    f"Spire API returned 0 records at offset {start} for {endpoint}, "
                    f"stopping with {len(records)} of {count} records"
                )
                break
            records.extend(page.records)
            start += self.page_size

        logger.info(f"Fetched {len(records)} records from {endpoint} in {pages} pages")
        return records

    def create_sales_order(
        self, credentials: Credentials, payload: dict[str, Any]
    ) -> PageResponse[dict[str, Any]]:
        """Create a sales order.

        Args:
            credentials: Spire user credentials.
            payload: The complete sales order body.

        Example:
            >>> client.create_sales_order(creds, {
            ...     "customer": {"customerNo": "C0001"},
            ...     "items": [{"inventory": {"partNo": "WIDGET"}, "orderQty": "2"}],
            ... })
        """
        return self.request(SALES_ORDERS, credentials, "POST", payload)

    def delete_sales_orders(
        self, credentials: Credentials, order_ids: Iterable[str | int]
    ) -> None:
        """Delete sales orders one at a time, stopping at the first failure.

        Raises:
            OrderDeletionError: Names the order that could not be deleted.
        """
        for order_id in order_ids:
            try:
                self.request(f"{SALES_ORDERS}/{order_id}", credentials, "DELETE")
            except SpireError as e:
                raise OrderDeletionError(order_id, e.message) from e
            logger.debug(f"Deleted sales order {order_id}")

    def fetch_sales_orders(
        self,
        credentials: Credentials,
        filter: dict[str, Any] | None = None,  # noqa: A002
        *,
        record_type: Callable[..., T] | None = None,
    ) -> list[T]:
        """Fetch all sales orders matching ``filter``."""
        return self.fetch_all(
            SALES_ORDERS, credentials, filter, record_type=record_type
        )

    def fetch_order_items(
        self,
        credentials: Credentials,
        order_numbers: Iterable[str],
        *,
        record_type: Callable[..., T] | None = None,
    ) -> list[T]:
        """Fetch the line items of the given sales orders.

        Returns an empty list without contacting the server when
        ``order_numbers`` is empty.
        """
        order_numbers = list(order_numbers)
        if not order_numbers:
            return []
        return self.fetch_all(
            SALES_ITEMS,
            credentials,
            any_of("orderNo", order_numbers),
            record_type=record_type,
        )
