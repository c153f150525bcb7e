"""Category service for managing monthly spending limits."""

import os
from typing import Any, Dict, List, Optional
from datetime import datetime
import logging
from boto3.dynamodb.conditions import Key

from shared.dynamodb import DynamoDBClient
from shared.validators import VALID_CATEGORIES, validate_amount, validate_category
from shared.exceptions import NotFoundError
from expenses.models import CategoryConfig

logger = logging.getLogger(__name__)


CATEGORY_EMOJIS = {
    'Food': '🍽️',
    'Travel': '✈️',
    'Entertainment': '🎬',
    'Office': '🏢',
    'Healthcare': '🏥',
    'Education': '📚',
    'Shopping': '🛍️',
    'Utilities': '⚡',
    'Other': '📦'
}


class CategoryService:
    """Service for managing per-category monthly limits."""

    def __init__(self):
        """Initialize category service."""
        self.categories_table = DynamoDBClient(os.environ.get('CATEGORIES_TABLE'))

    def list_categories(self, user_id: str) -> List[CategoryConfig]:
        """
        List every category with the user's configured monthly limit.

        Args:
            user_id: User ID

        Returns:
            One config per known category in canonical order; categories
            without a stored limit have monthly_limit None
        """
        records = self.categories_table.query_all(
            key_condition_expression=Key('user_id').eq(user_id)
        )
        limits: Dict[str, Optional[float]] = {
            record['category']: record.get('monthly_limit') for record in records
        }

        return [
            CategoryConfig(
                name=name,
                monthly_limit=limits.get(name),
                emoji=CATEGORY_EMOJIS.get(name)
            )
            for name in VALID_CATEGORIES
        ]

    def set_monthly_limit(self, user_id: str, category: str, limit: Any) -> CategoryConfig:
        """
        Create or replace a category's monthly limit.

        Args:
            user_id: User ID
            category: Category name
            limit: Monthly limit amount

        Returns:
            Updated category config

        Raises:
            ValidationError: If the category or limit is invalid
        """
        category = validate_category(category)
        monthly_limit = float(validate_amount(limit))

        self.categories_table.put_item({
            'user_id': user_id,
            'category': category,
            'monthly_limit': monthly_limit,
            'updated_at': datetime.utcnow().isoformat()
        })

        logger.info(f"Set monthly limit for {category} to {monthly_limit}")
        return CategoryConfig(
            name=category,
            monthly_limit=monthly_limit,
            emoji=CATEGORY_EMOJIS.get(category)
        )

    def clear_monthly_limit(self, user_id: str, category: str) -> None:
        """
        Remove a category's monthly limit.

        Args:
            user_id: User ID
            category: Category name

        Raises:
            ValidationError: If the category is invalid
            NotFoundError: If no limit is configured
        """
        category = validate_category(category)
        key = {'user_id': user_id, 'category': category}

        if not self.categories_table.get_item(key):
            raise NotFoundError("Category limit not found")

        self.categories_table.delete_item(key)

        logger.info(f"Cleared monthly limit for {category}")
