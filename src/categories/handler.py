"""Lambda handler for category limit operations."""

import os
import logging
from typing import Dict, Any
import sys
from urllib.parse import unquote

# Add parent directory to path for imports
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from shared.response import (
    success_response,
    error_response,
    validation_error_response,
    not_found_response,
    unauthorized_response
)
from shared.request import get_user_id, get_path_param, parse_body
from shared.validators import validate_required_fields
from shared.exceptions import (
    AuthenticationError,
    ExpenseTrackerException,
    ValidationError,
    NotFoundError
)
from categories.service import CategoryService

# Configure logging
logger = logging.getLogger()
logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO'))

# Initialize service
category_service = CategoryService()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for category limit operations.

    Handles:
    - GET /categories - List categories with limits
    - PUT /categories/{name} - Set monthly limit
    - DELETE /categories/{name} - Clear monthly limit

    Args:
        event: Lambda event
        context: Lambda context

    Returns:
        API Gateway response
    """
    try:
        logger.info(f"Request: {event.get('httpMethod')} {event.get('path')}")

        user_id = get_user_id(event)

        http_method = event.get('httpMethod')
        path = event.get('path') or ''

        if path == '/categories' and http_method == 'GET':
            return handle_list(user_id)
        elif path.startswith('/categories/') and http_method == 'PUT':
            return handle_set_limit(event, user_id)
        elif path.startswith('/categories/') and http_method == 'DELETE':
            return handle_clear_limit(event, user_id)
        else:
            return error_response("Route not found", status_code=404)

    except AuthenticationError as e:
        return unauthorized_response(e.message)
    except ValidationError as e:
        return validation_error_response(e.message, details=e.details)
    except NotFoundError as e:
        return not_found_response(e.message)
    except ExpenseTrackerException as e:
        logger.error(f"Application error: {str(e)}")
        return error_response(e.message, status_code=e.status_code)
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        return error_response("Internal server error", status_code=500)


def _category_name(event: Dict[str, Any]) -> str:
    name = get_path_param(event, 'name')
    if not name:
        raise ValidationError("Category name is required")
    return unquote(name)


def handle_list(user_id: str) -> Dict[str, Any]:
    """Handle list categories."""
    categories = category_service.list_categories(user_id)
    return success_response(data={
        'categories': categories,
        'count': len(categories)
    })


def handle_set_limit(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle set monthly limit."""
    category = _category_name(event)
    body = parse_body(event)
    validate_required_fields(body, ['monthly_limit'])

    config = category_service.set_monthly_limit(user_id, category, body['monthly_limit'])

    return success_response(
        data=config,
        message="Category limit updated successfully"
    )


def handle_clear_limit(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle clear monthly limit."""
    category = _category_name(event)
    category_service.clear_monthly_limit(user_id, category)

    return success_response(message="Category limit removed successfully")
