"""Translate domain exceptions into HTTP errors"""

import logging
from fastapi import HTTPException

from fraud_insight.domain.exceptions import (
    AuthenticationError,
    DomainException,
    NotFoundError,
)


def to_http_exception(error: DomainException, request_id: str) -> HTTPException:
    """
    Map a domain failure to an HTTP error.

    - AuthenticationError → 401
    - NotFoundError → 404
    - any other statistics service failure → 503, retry via the refresh endpoint
    """
    if isinstance(error, AuthenticationError):
        logging.warning(f"Authentication failed: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=401, detail=str(error))
    if isinstance(error, NotFoundError):
        logging.info(f"Not found: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=404, detail=str(error))

    logging.error(f"Statistics service error: {error}", extra={"request_id": request_id})
    return HTTPException(status_code=503, detail=f"Statistics service unavailable: {error}")
