# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - fs.py: Directory listing, creation and deletion endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import fs

__all__ = [
    "health",
    "fs",
]
