"""Date manipulation utilities"""

from datetime import date, timedelta

# Game months are a flat 30 days
DAYS_PER_GAME_MONTH = 30


def payment_due_date(first_payment: date, payment_number: int) -> date:
    """Due date of the n-th (1-based) monthly payment"""
    return first_payment + timedelta(days=(payment_number - 1) * DAYS_PER_GAME_MONTH)
