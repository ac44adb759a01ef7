"""
/offers -- job offers posted by clients.

Every endpoint requires a bearer token (see security.require_credential).
"""

from fastapi import Depends

from staffing_api.routes.resources import build_router
from staffing_api.security import require_credential

router = build_router("offers", "Offers", dependencies=[Depends(require_credential)])
