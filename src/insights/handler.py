"""Lambda handler for risk and spending insights."""

import os
import logging
from typing import Dict, Any
import sys

# Add parent directory to path for imports
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from shared.response import (
    success_response,
    csv_response,
    error_response,
    validation_error_response,
    not_found_response,
    unauthorized_response
)
from shared.request import get_user_id
from shared.exceptions import (
    AuthenticationError,
    ExpenseTrackerException,
    ValidationError,
    NotFoundError
)
from insights.service import InsightsService
from reports.export import export_filename

# Configure logging
logger = logging.getLogger()
logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO'))

# Initialize service
insights_service = InsightsService()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for insights.

    Handles:
    - GET /insights - Full insights report
    - GET /insights/risks - Risk findings and compliance score
    - GET /insights/limits - Category limit statuses
    - GET /insights/export - CSV export of all expenses

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

        if http_method != 'GET':
            return error_response("Route not found", status_code=404)

        if path == '/insights':
            return success_response(data=insights_service.get_insights(user_id))
        elif path == '/insights/risks':
            return success_response(data=insights_service.get_risks(user_id))
        elif path == '/insights/limits':
            limits = insights_service.get_category_limits(user_id)
            return success_response(data={'categories': limits, 'count': len(limits)})
        elif path == '/insights/export':
            return handle_export(user_id)
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


def handle_export(user_id: str) -> Dict[str, Any]:
    """Handle CSV export."""
    content = insights_service.export_csv(user_id)
    if not content:
        return validation_error_response("No expenses to export")

    logger.info(f"Exported expenses for user {user_id}")
    return csv_response(content, export_filename())
