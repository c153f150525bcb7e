"""Lambda handler for expense operations."""

import os
import logging
from typing import Dict, Any
import sys

# Add parent directory to path for imports
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from shared.response import (
    success_response,
    error_response,
    validation_error_response,
    not_found_response,
    unauthorized_response
)
from shared.request import get_user_id, get_query_params, get_path_param, parse_body
from shared.exceptions import (
    AuthenticationError,
    ExpenseTrackerException,
    ValidationError,
    NotFoundError
)
from expenses.filters import filter_expenses
from expenses.service import ExpenseService
from categories.service import CategoryService

# Configure logging
logger = logging.getLogger()
logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO'))

# Initialize services
expense_service = ExpenseService()
category_service = CategoryService()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for expense operations.

    Handles:
    - POST /expenses - Create expense
    - GET /expenses - List expenses (search, category, sort_by, sort_order)
    - GET /expenses/{id} - Get expense details
    - DELETE /expenses/{id} - Delete expense

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

        if path == '/expenses' and http_method == 'POST':
            return handle_create(event, user_id)
        elif path == '/expenses' and http_method == 'GET':
            return handle_list(event, user_id)
        elif path.startswith('/expenses/') and http_method == 'GET':
            return handle_get(event, user_id)
        elif path.startswith('/expenses/') and http_method == 'DELETE':
            return handle_delete(event, user_id)
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


def handle_create(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle create expense."""
    body = parse_body(event)
    categories = category_service.list_categories(user_id)

    expense = expense_service.create_expense(user_id, body, categories)

    logger.info(f"Expense created successfully: {expense.expense_id}")

    return success_response(
        data=expense,
        message="Expense created successfully",
        status_code=201
    )


def handle_list(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle list expenses."""
    query_params = get_query_params(event)

    expenses = expense_service.list_all_expenses(user_id)
    filtered = filter_expenses(
        expenses,
        search_term=query_params.get('search', ''),
        category=query_params.get('category', ''),
        sort_by=query_params.get('sort_by', 'date'),
        sort_order=query_params.get('sort_order', 'desc')
    )

    return success_response(data={
        'expenses': filtered,
        'count': len(filtered),
        'total_count': len(expenses)
    })


def handle_get(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle get expense."""
    expense_id = get_path_param(event, 'id')
    if not expense_id:
        return validation_error_response("Expense ID is required")

    expense = expense_service.get_expense(user_id, expense_id)
    return success_response(data=expense)


def handle_delete(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle delete expense."""
    expense_id = get_path_param(event, 'id')
    if not expense_id:
        return validation_error_response("Expense ID is required")

    expense_service.delete_expense(user_id, expense_id)

    logger.info(f"Expense deleted successfully: {expense_id}")

    return success_response(message="Expense deleted successfully")
