# =============================================================================
#  File: membership/api/models/user_account_api_models.py
#  Membership API Models - registration and verification cancellation
# =============================================================================

from __future__ import annotations

import uuid
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, Field, StringConstraints

# ──────────────────────────────────────────────────────────────────────────────
#  TYPE ALIASES (Pydantic v2 style)
# ──────────────────────────────────────────────────────────────────────────────

# Length bounds only; the account service owns the business rules and
# reports them as form-level errors.
Username = Annotated[str, StringConstraints(max_length=100)]
Password = Annotated[str, StringConstraints(max_length=128)]


# ──────────────────────────────────────────────────────────────────────────────
#  REGISTRATION
# ──────────────────────────────────────────────────────────────────────────────
class RegisterRequest(BaseModel):
    """Registration form."""
    username: Username = Field(default="", description="Desired username")
    password: Password = Field(default="", description="Initial password")
    email: str = Field(default="", max_length=320, description="Email address")


class RegisterResponse(BaseModel):
    status: str = "success"
    account_id: uuid.UUID
    require_account_verification: bool


# ──────────────────────────────────────────────────────────────────────────────
#  VERIFICATION
# ──────────────────────────────────────────────────────────────────────────────
class VerifyEmailResponse(BaseModel):
    status: str = "success"
    account_id: uuid.UUID
    email: str


class CancelVerificationResponse(BaseModel):
    closed: bool


# ──────────────────────────────────────────────────────────────────────────────
#  ERRORS
# ──────────────────────────────────────────────────────────────────────────────
class FormErrorDetail(BaseModel):
    """Form-level (not field-specific) errors plus the input to redisplay."""
    form_errors: List[str]
    input: Dict[str, Optional[str]] = Field(default_factory=dict)


class FormErrorResponse(BaseModel):
    detail: FormErrorDetail
