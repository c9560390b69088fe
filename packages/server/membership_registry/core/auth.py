"""
Caller identity for the HTTP boundary.

Authentication itself happens upstream (gateway, ledger, signed request). By
the time a request reaches the registry, the `Authorization: Bearer <identity>`
header carries an identity the registry trusts as-is.
"""

from __future__ import annotations

from typing import Optional

import structlog
from fastapi import Depends, HTTPException
from fastapi.security import APIKeyHeader

from membership_shared.schemas.common import MAX_IDENTITY_LENGTH

log = structlog.get_logger()

api_key_header = APIKeyHeader(name="Authorization", auto_error=False)


def parse_caller(authorization: str) -> str:
    """Extract the identity from a Bearer header.

    Raises ValueError if the header is not `Bearer <identity>`.
    """
    scheme, _, identity = authorization.partition(" ")
    identity = identity.strip()
    if scheme != "Bearer" or not identity:
        raise ValueError("Expected 'Bearer <identity>'")
    if len(identity) > MAX_IDENTITY_LENGTH:
        raise ValueError("Identity too long")
    return identity


async def get_caller(authorization: Optional[str] = Depends(api_key_header)) -> str:
    """FastAPI dependency: the calling identity."""
    if not authorization:
        raise HTTPException(status_code=401, detail="Authentication required")
    try:
        return parse_caller(authorization)
    except ValueError as exc:
        log.info("auth.rejected", reason=str(exc))
        raise HTTPException(status_code=401, detail=str(exc))
