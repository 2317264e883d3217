"""
Base response schemas for standardized API responses.

Every error leaves the API as ``ErrorResponse``; deletes answer with
``MessageResponse``.
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.constants import DELETED_MESSAGE


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. after a delete."""

    message: str = Field(default=DELETED_MESSAGE, description="Human-readable result")

    model_config = ConfigDict(json_schema_extra={"example": {"message": DELETED_MESSAGE}})


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    message: str = Field(description="Human-readable error message")
    code: Optional[str] = Field(default=None, description="Error code for programmatic handling")
    errors: Optional[Dict[str, str]] = Field(default=None, description="Field -> reason map")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Bad Request",
                "code": "VALIDATION_ERROR",
                "errors": {"lat": "Latitude must be within -90 and 90"},
            }
        }
    )
