"""
vps-back — API Key Authentication
==================================

What:  FastAPI dependency guarding the /secure routers.
How:   Reads the `x-api-key` header and compares it to settings.api_key in
       constant time. Attached at router level:

           router = APIRouter(dependencies=[Depends(require_api_key)])

Why a dependency (not middleware):
    Only /secure routes need the key. A router dependency also shows the
    header in the OpenAPI docs.
"""

import logging
import secrets
from typing import Optional

from fastapi import Security
from fastapi.security import APIKeyHeader

from vps_back.config import settings
from vps_back.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"

# auto_error=False: a missing header reaches require_api_key as None so the
# rejection goes through our own 401 envelope instead of FastAPI's 403
_api_key_scheme = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


async def require_api_key(api_key: Optional[str] = Security(_api_key_scheme)) -> None:
    """
    Raises:
        UnauthorizedError: header missing, key wrong, or no key configured (→ 401)
    """
    expected = settings.api_key
    if not expected or not api_key:
        raise UnauthorizedError()
    if not secrets.compare_digest(api_key.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("Rejected request with invalid API key")
        raise UnauthorizedError()
