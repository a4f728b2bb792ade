"""
Request rate limiting.

A single slowapi limiter shared by all routers. ``create_app`` switches it
on or off from ``RATE_LIMIT_ENABLED``.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Per-route limits
LOGIN_LIMIT = "10/minute"  # brute force protection
REGISTER_LIMIT = "5/minute"
DEFAULT_LIMIT = "100/minute"
HEALTH_LIMIT = "60/minute"
