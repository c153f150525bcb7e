"""DynamoDB table access for expense and category records."""

import os
import boto3
from typing import Any, Dict, List, Optional
from datetime import date, datetime
from decimal import Decimal
from botocore.exceptions import ClientError
import logging

from .exceptions import DatabaseError

logger = logging.getLogger(__name__)


class DynamoDBClient:
    """Thin wrapper around one DynamoDB table."""

    def __init__(self, table_name: str):
        """
        Initialize DynamoDB client.

        Args:
            table_name: Name of the DynamoDB table
        """
        self.table_name = table_name

        # Support for LocalStack
        endpoint_url = os.environ.get('LOCALSTACK_ENDPOINT')
        if endpoint_url and os.environ.get('USE_LOCALSTACK', 'false').lower() == 'true':
            self.dynamodb = boto3.resource('dynamodb', endpoint_url=endpoint_url)
        else:
            self.dynamodb = boto3.resource('dynamodb')

        self.table = self.dynamodb.Table(table_name)

    def put_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Put an item in the table, replacing any item with the same key.

        Args:
            item: Item to put

        Returns:
            The item as written

        Raises:
            DatabaseError: If the operation fails
        """
        try:
            item = self._python_to_dynamodb(item)
            self.table.put_item(Item=item)
            return self._dynamodb_to_python(item)
        except ClientError as e:
            logger.error(f"Error putting item into {self.table_name}: {e}")
            raise DatabaseError(f"Failed to put item: {str(e)}")

    def get_item(self, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Get an item from the table.

        Args:
            key: Primary key of the item

        Returns:
            The item if found, None otherwise

        Raises:
            DatabaseError: If the operation fails
        """
        try:
            response = self.table.get_item(Key=key)
            item = response.get('Item')
            if item:
                return self._dynamodb_to_python(item)
            return None
        except ClientError as e:
            logger.error(f"Error getting item from {self.table_name}: {e}")
            raise DatabaseError(f"Failed to get item: {str(e)}")

    def delete_item(self, key: Dict[str, Any]) -> None:
        """
        Delete an item from the table.

        Args:
            key: Primary key of the item

        Raises:
            DatabaseError: If the operation fails
        """
        try:
            self.table.delete_item(Key=key)
        except ClientError as e:
            logger.error(f"Error deleting item from {self.table_name}: {e}")
            raise DatabaseError(f"Failed to delete item: {str(e)}")

    def query(
        self,
        key_condition_expression: Any,
        index_name: Optional[str] = None,
        limit: Optional[int] = None,
        scan_forward: bool = True,
        exclusive_start_key: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Query one page of items.

        Args:
            key_condition_expression: Key condition expression
            index_name: Optional index name
            limit: Optional page size
            scan_forward: Sort order (default: True for ascending)
            exclusive_start_key: Optional pagination key

        Returns:
            Dictionary with items and the LastEvaluatedKey (None on the last page)

        Raises:
            DatabaseError: If the operation fails
        """
        try:
            kwargs = {
                'KeyConditionExpression': key_condition_expression,
                'ScanIndexForward': scan_forward
            }

            if index_name:
                kwargs['IndexName'] = index_name
            if limit:
                kwargs['Limit'] = limit
            if exclusive_start_key:
                kwargs['ExclusiveStartKey'] = exclusive_start_key

            response = self.table.query(**kwargs)

            return {
                'items': [self._dynamodb_to_python(item) for item in response.get('Items', [])],
                'last_evaluated_key': response.get('LastEvaluatedKey')
            }
        except ClientError as e:
            logger.error(f"Error querying {self.table_name}: {e}")
            raise DatabaseError(f"Failed to query items: {str(e)}")

    def query_all(
        self,
        key_condition_expression: Any,
        index_name: Optional[str] = None,
        scan_forward: bool = True,
        page_size: int = 100
    ) -> List[Dict[str, Any]]:
        """
        Query every matching item, following pagination.

        Args:
            key_condition_expression: Key condition expression
            index_name: Optional index name
            scan_forward: Sort order (default: True for ascending)
            page_size: Items requested per page

        Returns:
            All matching items in index order
        """
        items: List[Dict[str, Any]] = []
        last_key = None

        while True:
            result = self.query(
                key_condition_expression=key_condition_expression,
                index_name=index_name,
                limit=page_size,
                scan_forward=scan_forward,
                exclusive_start_key=last_key
            )

            items.extend(result['items'])
            last_key = result.get('last_evaluated_key')

            if not last_key:
                break

        return items

    def batch_write(self, items: List[Dict[str, Any]]) -> None:
        """
        Batch write items to the table.

        Args:
            items: List of items to write

        Raises:
            DatabaseError: If the operation fails
        """
        try:
            with self.table.batch_writer() as batch:
                for item in items:
                    batch.put_item(Item=self._python_to_dynamodb(item))
        except ClientError as e:
            logger.error(f"Error batch writing to {self.table_name}: {e}")
            raise DatabaseError(f"Failed to batch write items: {str(e)}")

    @staticmethod
    def _python_to_dynamodb(obj: Any) -> Any:
        """Convert Python values to DynamoDB types (floats to Decimal, dates to ISO strings)."""
        if isinstance(obj, dict):
            return {
                k: DynamoDBClient._python_to_dynamodb(v)
                for k, v in obj.items()
                if v is not None
            }
        elif isinstance(obj, (list, tuple)):
            return [DynamoDBClient._python_to_dynamodb(item) for item in obj]
        elif isinstance(obj, float):
            return Decimal(str(obj))
        elif isinstance(obj, (datetime, date)):
            return obj.isoformat()
        return obj

    @staticmethod
    def _dynamodb_to_python(obj: Any) -> Any:
        """Convert DynamoDB types back to plain Python values."""
        if isinstance(obj, dict):
            return {k: DynamoDBClient._dynamodb_to_python(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [DynamoDBClient._dynamodb_to_python(item) for item in obj]
        elif isinstance(obj, Decimal):
            if obj % 1 == 0:
                return int(obj)
            return float(obj)
        return obj
