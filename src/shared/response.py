"""API Gateway response builders."""

import json
from typing import Any, Dict, Optional
from datetime import datetime, date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel


DEFAULT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS"
}


class ResponseEncoder(json.JSONEncoder):
    """JSON encoder for pydantic models, Decimal, Enum and date values."""

    def default(self, obj):
        if isinstance(obj, BaseModel):
            return obj.model_dump(mode='json')
        if isinstance(obj, Decimal):
            return float(obj)
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        return super().default(obj)


def _build(status_code: int, body: str, content_type: str,
           headers: Optional[Dict[str, str]]) -> Dict[str, Any]:
    response_headers = {"Content-Type": content_type, **DEFAULT_HEADERS}
    if headers:
        response_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": body
    }


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Create a standardized success response.

    Args:
        data: Response data
        message: Optional success message
        status_code: HTTP status code (default: 200)
        headers: Optional additional headers

    Returns:
        Lambda proxy response dictionary
    """
    body = {
        "success": True,
        "data": data
    }

    if message:
        body["message"] = message

    return _build(status_code, json.dumps(body, cls=ResponseEncoder), "application/json", headers)


def csv_response(content: str, filename: str) -> Dict[str, Any]:
    """Create a CSV download response."""
    return _build(
        200,
        content,
        "text/csv; charset=utf-8",
        {"Content-Disposition": f'attachment; filename="{filename}"'}
    )


def error_response(
    message: str,
    status_code: int = 500,
    error_code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Create a standardized error response.

    Args:
        message: Error message
        status_code: HTTP status code (default: 500)
        error_code: Optional error code
        details: Optional error details
        headers: Optional additional headers

    Returns:
        Lambda proxy response dictionary
    """
    body = {
        "success": False,
        "error": {
            "message": message,
            "code": error_code or f"ERROR_{status_code}"
        }
    }

    if details:
        body["error"]["details"] = details

    return _build(status_code, json.dumps(body, cls=ResponseEncoder), "application/json", headers)


def validation_error_response(
    message: str,
    details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Create a validation error response."""
    return error_response(
        message=message,
        status_code=400,
        error_code="VALIDATION_ERROR",
        details=details
    )


def not_found_response(message: str = "Resource not found") -> Dict[str, Any]:
    """Create a not found error response."""
    return error_response(
        message=message,
        status_code=404,
        error_code="NOT_FOUND"
    )


def unauthorized_response(message: str = "Unauthorized") -> Dict[str, Any]:
    """Create an unauthorized error response."""
    return error_response(
        message=message,
        status_code=401,
        error_code="UNAUTHORIZED"
    )
