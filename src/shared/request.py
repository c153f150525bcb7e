"""Helpers for reading API Gateway proxy events."""

import json
from typing import Any, Dict, Optional

from .exceptions import AuthenticationError, ValidationError


def get_user_id(event: Dict[str, Any]) -> str:
    """
    Extract user ID from Cognito authorizer claims.

    Args:
        event: Lambda event

    Returns:
        User ID (sub claim)

    Raises:
        AuthenticationError: If the request has no authenticated user
    """
    request_context = event.get('requestContext') or {}
    authorizer = request_context.get('authorizer') or {}
    claims = authorizer.get('claims') or {}
    user_id = claims.get('sub')

    if not user_id:
        raise AuthenticationError()

    return user_id


def get_query_params(event: Dict[str, Any]) -> Dict[str, str]:
    """Query string parameters, or an empty dict."""
    return event.get('queryStringParameters') or {}


def get_path_param(event: Dict[str, Any], name: str) -> Optional[str]:
    """A single path parameter, or None."""
    path_params = event.get('pathParameters') or {}
    return path_params.get(name)


def parse_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Parse a JSON request body.

    Raises:
        ValidationError: If the body is not a JSON object
    """
    try:
        body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        raise ValidationError("Request body must be valid JSON")

    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")

    return body
