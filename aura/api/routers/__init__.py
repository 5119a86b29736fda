"""API routers for Aura Board."""

from . import events
from . import reviews
from . import dashboard
from . import members
from . import health

__all__ = [
    "events",
    "reviews",
    "dashboard",
    "members",
    "health",
]
