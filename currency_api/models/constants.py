"""Routing and request constants shared by routers and error handlers."""

from typing import List, Tuple

ALLOWED_METHODS: List[str] = ["GET"]
AVAILABLE_ENDPOINTS: List[str] = ["/", "/hello", "/health", "/convert", "/currencies"]

# Query parameters accepted by GET /convert, in the order they are reported
# when missing.
CONVERT_PARAMS: Tuple[str, ...] = ("amount", "from", "to")
