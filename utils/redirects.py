"""Redirect URL builders shared by the OAuth callback endpoints."""

from typing import Mapping, Optional
from urllib.parse import quote

# Characters encodeURIComponent leaves alone, on top of quote()'s own
# always-safe set (letters, digits, "_.-~").
_COMPONENT_SAFE = "!*'()"

ERROR_PAGE_PATH = "/auth"


def encode_component(value: str) -> str:
    """Percent-encode a single query/fragment value exactly once."""
    return quote(str(value), safe=_COMPONENT_SAFE)


def _join(params: Mapping[str, Optional[str]]) -> str:
    return "&".join(
        f"{encode_component(key)}={encode_component(value)}"
        for key, value in params.items()
        if value is not None
    )


def error_redirect(base_url: str, code: str, description: Optional[str] = None) -> str:
    """URL of the dashboard's auth page carrying an opaque error code.

    The description is only attached when non-empty.
    """
    params = {"error": code, "description": description or None}
    return f"{base_url}{ERROR_PAGE_PATH}?{_join(params)}"


def success_redirect(base_url: str, params: Mapping[str, Optional[str]]) -> str:
    """URL of the dashboard root with ``params`` in the query string."""
    return f"{base_url}/?{_join(params)}"


def fragment_redirect(base_url: str, params: Mapping[str, Optional[str]]) -> str:
    """URL of the dashboard root with ``params`` in the fragment.

    Browsers do not send the fragment to any server.
    """
    return f"{base_url}/#{_join(params)}"
