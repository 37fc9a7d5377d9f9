from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Activity Recordings API",
            version="0.1.0",
            summary="Record, upload and manage group activity session recordings",
            routes=app.routes,
        )

        # Add security schemes
        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": "Token returned by register or login",
            },
        }

        # Apply security globally (will be overridden for public endpoints)
        openapi_schema["security"] = [{"BearerAuth": []}]

        # Remove security from public endpoints
        public_endpoints = {
            ("POST", "/api/auth/register"),
            ("POST", "/api/auth/login"),
            ("GET", "/health"),
        }

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in public_endpoints:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"error": "Invalid email or password", "type": "authentication_error"},
                {"error": "Recording not found", "type": "not_found"},
                {"error": "Unauthorized to delete this recording", "type": "access_denied"},
            ]
        }
    }


class ValidationErrorDetail(BaseModel):
    field: str = Field(..., description="Dotted path of the offending field")
    message: str = Field(..., description="What is wrong with it")


class ValidationErrorResponse(ErrorResponse):
    """Error response for malformed input, with per-field details."""

    details: list[ValidationErrorDetail] = Field(default_factory=list)


class MessageResponse(BaseModel):
    message: str = Field(..., description="Human-readable result")
