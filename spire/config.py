"""Client-wide defaults for talking to a Spire server."""

DEFAULT_TIMEOUT = 10.0
"""Per-request timeout in seconds."""

PAGE_SIZE = 10000
"""Largest ``limit`` the server honours for a single collection request."""

DEFAULT_API_VERSION = "v2"


def make_root_url(
    host: str,
    port: int,
    tenant: str,
    version: str = DEFAULT_API_VERSION,
) -> str:
    """Build the API root for one tenant.

    Example:
        >>> make_root_url("spire.example.com", 10880, "companies/acme")
        'https://spire.example.com:10880/api/v2/companies/acme'
    """
    return f"https://{host}:{port}/api/{version}/{tenant.strip('/')}"
