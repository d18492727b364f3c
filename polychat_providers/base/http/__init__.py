"""HTTP utilities package for providers.

Exposes pooled httpx clients and cancellation-aware request helpers.
"""

from .client import get_httpx_client, close_all_clients
from .transport import send_request, open_stream

__all__ = ["get_httpx_client", "close_all_clients", "send_request", "open_stream"]
