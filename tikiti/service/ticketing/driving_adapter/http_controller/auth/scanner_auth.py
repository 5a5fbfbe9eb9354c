import secrets
from typing import Optional

from fastapi import Header

from tikiti.platform.config.core_setting import settings
from tikiti.platform.exception.exceptions import AuthenticationError


async def require_scanner_key(x_api_key: Optional[str] = Header(default=None)) -> None:
    """
    Gate-scanner authentication.

    Enforced only when SCANNER_API_KEY is configured; the header must match it exactly.
    """
    expected = settings.SCANNER_API_KEY.get_secret_value()
    if not expected:
        return
    if not x_api_key or not secrets.compare_digest(x_api_key.encode(), expected.encode()):
        raise AuthenticationError('Unauthorized')
