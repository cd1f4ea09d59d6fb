# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the auth endpoints."""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel


# -- Requests --------------------------------------------------------------
# Every registration field is optional at the schema level: a missing email,
# password or site is reported by the local protocol (with a flash message),
# not as a generic 422.


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    username: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    site: Optional[Union[int, str]] = None


class LoginRequest(BaseModel):
    identifier: str  # email address or username
    password: str


class ConnectRequest(BaseModel):
    password: Optional[str] = None


# -- Responses -------------------------------------------------------------


class FlashItem(BaseModel):
    type: str
    message: str

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    access_token: str
    token_type: str  # always "bearer"
    flash: List[FlashItem] = []


class UserInfoResponse(BaseModel):
    id: int
    email: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    site_id: int
    last_login: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    detail: str          # machine-readable error / rejection code
    flash: List[FlashItem] = []
