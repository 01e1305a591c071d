"""
Identity models.

The identity provider owns the session lifecycle; this service only sees a
verified token and turns its claims into an Identity.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class Identity(BaseModel):
    """
    Authenticated caller resolved from request credentials.

    Attached to request.state.identity by the auth middleware.
    """
    user_id: str = Field(
        ...,
        min_length=1,
        description="Stable user identifier (token subject)"
    )
    session_id: Optional[str] = Field(
        None,
        description="Identity provider session identifier"
    )
    claims: Dict[str, Any] = Field(
        default_factory=dict,
        description="Verified token claims"
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "user_id": "user_2abc",
                "session_id": "sess_2xyz",
                "claims": {"sub": "user_2abc", "sid": "sess_2xyz"}
            }
        }
    }


class ErrorResponse(BaseModel):
    """Error response schema."""
    error: str = Field(
        ...,
        min_length=1,
        description="Error message"
    )
    details: Optional[Dict[str, str]] = Field(
        None,
        description="Field path -> message, present on validation errors"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "Validation failed",
                "details": {"confirmPassword": "Passwords don't match"}
            }
        }
    }
