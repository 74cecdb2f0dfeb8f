"""Pydantic schemas for API request/response validation"""

from typing import Literal, Optional, Union
from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request body for POST /v1/auth/login"""

    email: str = Field(..., min_length=3, description="Analyst email")
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    id: int
    email: str
    full_name: str
    role: str


class MeResponse(BaseModel):
    email: str


class RefreshResponse(BaseModel):
    """Outcome of a manual snapshot refresh"""

    view: str
    applied: bool
    records: Optional[int] = None


class ServerFilterRequest(BaseModel):
    """
    Request body for POST /v1/timeline/server-filter.

    Bounds accept numbers or strings and are parsed leniently: a malformed
    bound is dropped rather than rejected.
    """

    fraud_status: Literal["all", "fraud", "safe"] = "all"
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    min_amount: Optional[Union[float, str]] = None
    max_amount: Optional[Union[float, str]] = None
    customer_id: Optional[str] = None
    risk_level: Optional[Literal["low", "medium", "high", "critical"]] = None
    decision: Optional[Literal["APPROVE", "REVIEW", "BLOCK"]] = None
