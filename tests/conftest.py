import pytest

from expense_analytics.analytics.models import TransactionRecord
from expense_analytics.config import Settings


def _rec(id, category, amount, date, description=None):
    return TransactionRecord(
        id=str(id), category=category, amount=amount, date=date, description=description
    )


@pytest.fixture
def january_records():
    return [
        _rec(1, "Food", 150, "2025-01-10", "groceries"),
        _rec(2, "Travel", 200, "2025-01-15", "train"),
    ]


@pytest.fixture
def quarter_records():
    return [
        _rec(1, "Food", 100, "2025-01-03", "groceries"),
        _rec(2, "Travel", 300, "2025-01-10"),
        _rec(3, "Food", 250, "2025-02-02", "restaurant"),
        _rec(4, "Bills", 150, "2025-02-20"),
        _rec(5, "Food", 50, "2025-03-05"),
        _rec(6, "Shopping", 700, "2025-03-12", "shoes"),
        _rec(7, "Food", 80, "2024-12-28"),
    ]


@pytest.fixture
def settings():
    return Settings(_env_file=None)
