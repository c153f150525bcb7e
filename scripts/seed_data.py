#!/usr/bin/env python3
"""
Seed data script for the expense tracker.
Creates sample expenses and category limits for one user, including a few
records that trip each risk rule so the insights dashboard has something to show.
"""

import argparse
import os
import sys
from datetime import datetime, timedelta
import uuid
import random

import boto3

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from shared.dynamodb import DynamoDBClient
from shared.validators import VALID_CATEGORIES


VENDORS = {
    'Food': ['Swiggy', 'Zomato', 'Cafe Coffee Day', 'Local Restaurant'],
    'Travel': ['IndiGo', 'Uber', 'Ola', 'IRCTC'],
    'Entertainment': ['PVR Cinemas', 'BookMyShow', 'Netflix'],
    'Office': ['Staples', 'Amazon Business', 'Printing Shop'],
    'Healthcare': ['Apollo Pharmacy', 'City Clinic'],
    'Education': ['Coursera', 'Bookstore'],
    'Shopping': ['Amazon', 'Flipkart', 'Croma'],
    'Utilities': ['Electricity Board', 'Jio Fiber', 'Water Utility'],
    'Other': ['Miscellaneous Store']
}

CATEGORY_LIMITS = {
    'Food': 15000,
    'Travel': 40000,
    'Entertainment': 5000,
    'Shopping': 20000
}


def get_table_names_from_stack(stack_name='expense-tracker-aws'):
    """Get table names from CloudFormation stack outputs."""
    cf = boto3.client('cloudformation')

    try:
        response = cf.describe_stacks(StackName=stack_name)
        outputs = response['Stacks'][0]['Outputs']

        table_names = {}
        for output in outputs:
            key = output['OutputKey']
            if 'Expenses' in key and 'Table' in key:
                table_names['expenses'] = output['OutputValue']
            elif 'Categories' in key and 'Table' in key:
                table_names['categories'] = output['OutputValue']

        return table_names
    except Exception as e:
        print(f"Error getting table names from stack: {e}")
        print("Using default table names...")
        return {
            'expenses': f'{stack_name}-expenses',
            'categories': f'{stack_name}-categories'
        }


def _expense(user_id, amount, category, date, vendor=None, description=None, receipt_url=None):
    now = datetime.utcnow().isoformat()
    return {
        'user_id': user_id,
        'expense_id': str(uuid.uuid4()),
        'amount': float(amount),
        'category': category,
        'date': date.strftime('%Y-%m-%d'),
        'vendor': vendor,
        'description': description,
        'receipt_url': receipt_url,
        'created_at': now,
        'updated_at': now
    }


def build_expenses(user_id, num_expenses=50):
    """Random everyday expenses plus one example per risk rule."""
    today = datetime.utcnow()
    expenses = []

    for _ in range(num_expenses):
        category = random.choice(VALID_CATEGORIES)
        expenses.append(_expense(
            user_id,
            round(random.uniform(50.0, 3000.0), 2),
            category,
            today - timedelta(days=random.randint(0, 60)),
            vendor=random.choice(VENDORS[category]),
            description=f"{category} purchase"
        ))

    # High amount, no receipt
    expenses.append(_expense(user_id, 150000, 'Office', today, vendor='Croma',
                             description='Laptops for new hires'))
    # Duplicate pair
    expenses.append(_expense(user_id, 500, 'Food', today - timedelta(days=2),
                             vendor='Swiggy', description='Team lunch'))
    expenses.append(_expense(user_id, 500, 'Food', today - timedelta(days=1),
                             vendor='Swiggy', description='Team lunch'))
    # Weekend travel
    last_saturday = today - timedelta(days=(today.weekday() - 5) % 7)
    expenses.append(_expense(user_id, 2400, 'Travel', last_saturday,
                             vendor='Uber', description='Airport transfer'))
    # Missing documentation
    expenses.append(_expense(user_id, 6000, 'Shopping', today - timedelta(days=3)))

    return expenses


def build_category_limits(user_id):
    """Monthly limits for a handful of categories."""
    now = datetime.utcnow().isoformat()
    return [
        {
            'user_id': user_id,
            'category': category,
            'monthly_limit': float(limit),
            'updated_at': now
        }
        for category, limit in CATEGORY_LIMITS.items()
    ]


def main():
    """Main function."""
    parser = argparse.ArgumentParser(description="Seed sample expense tracker data")
    parser.add_argument('user_id', help="User ID (Cognito sub) to seed data for")
    parser.add_argument('--stack-name', default='expense-tracker-aws')
    parser.add_argument('--num-expenses', type=int, default=50)
    args = parser.parse_args()

    print("Getting table names from CloudFormation...")
    table_names = get_table_names_from_stack(args.stack_name)
    for key, value in table_names.items():
        print(f"  {key}: {value}")

    expenses = build_expenses(args.user_id, args.num_expenses)
    DynamoDBClient(table_names['expenses']).batch_write(expenses)
    print(f"Created {len(expenses)} expenses")

    limits = build_category_limits(args.user_id)
    DynamoDBClient(table_names['categories']).batch_write(limits)
    print(f"Created {len(limits)} category limits")

    print(f"\nSeeding complete for user: {args.user_id}")


if __name__ == '__main__':
    main()
