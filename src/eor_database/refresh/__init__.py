"""
Refresh of the collection dumps from the remote API.
"""

from .service import REFRESH_ORDER, RefreshReport, RefreshService

__all__ = ["REFRESH_ORDER", "RefreshReport", "RefreshService"]
