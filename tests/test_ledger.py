"""Tests for transaction validation and ledger operations."""

from datetime import date
from decimal import Decimal

import pytest

from finfly.db import repo
from finfly.db.schema import User
from finfly.ledger.transactions import (
    TransactionInput,
    TransactionValidationError,
    build_transaction,
    create_transaction,
    delete_transaction,
    list_transactions,
    normalize_value,
    validate_category,
)
from finfly.models.domain import VALID_CATEGORIES, TransactionFilter


@pytest.fixture
def users(session):
    session.add_all(
        [
            User(user_id="u1", name="Ana", email="ana@example.com", password_hash="x"),
            User(user_id="u2", name="Bruno", email="bruno@example.com", password_hash="x"),
        ]
    )
    session.commit()
    return "u1", "u2"


def _add(session, user_id, value, txn_type, category, day, description=""):
    return create_transaction(
        session,
        user_id,
        TransactionInput(
            value=value,
            type=txn_type,
            category=category,
            description=description,
            date=day,
        ),
    )


class TestValidation:
    """Category must belong to its type's valid set; value must be positive."""

    @pytest.mark.parametrize("txn_type", ["income", "expense"])
    def test_every_listed_category_accepted(self, txn_type):
        for category in VALID_CATEGORIES[txn_type]:
            assert validate_category(txn_type, category) == category

    def test_expense_category_rejected_for_income(self):
        with pytest.raises(TransactionValidationError, match="Valid categories for income"):
            build_transaction("u1", TransactionInput(value=10, type="income", category="food"))

    def test_income_category_rejected_for_expense(self):
        with pytest.raises(TransactionValidationError):
            build_transaction("u1", TransactionInput(value=10, type="expense", category="salary"))

    def test_unknown_type_rejected(self):
        with pytest.raises(TransactionValidationError, match="income"):
            build_transaction("u1", TransactionInput(value=10, type="transfer", category="others"))

    @pytest.mark.parametrize("value", [0, -5, "0.001", "abc", "NaN", True])
    def test_non_positive_or_invalid_value_rejected(self, value):
        with pytest.raises(TransactionValidationError):
            normalize_value(value)

    def test_value_rounded_to_cents(self):
        assert normalize_value("10.005") == Decimal("10.01")
        assert normalize_value(3) == Decimal("3.00")

    def test_largest_storable_value_accepted(self):
        assert normalize_value("9999999999.99") == Decimal("9999999999.99")

    @pytest.mark.parametrize("value", ["10000000000", 1e13, "9999999999.995", "1e27"])
    def test_value_beyond_column_precision_rejected(self, value):
        with pytest.raises(TransactionValidationError, match="must not exceed"):
            normalize_value(value)

    @pytest.mark.parametrize("value", ["-1e27", "Infinity"])
    def test_extreme_values_rejected_without_decimal_errors(self, value):
        with pytest.raises(TransactionValidationError):
            normalize_value(value)

    def test_missing_fields_rejected(self):
        with pytest.raises(TransactionValidationError, match="required"):
            build_transaction("u1", TransactionInput(value=10, type="", category="food"))

    def test_defaults(self):
        entity = build_transaction(
            "u1", TransactionInput(value="12.5", type="expense", category="food")
        )
        assert entity.description == ""
        assert entity.date == date.today()
        assert entity.user_id == "u1"
        assert entity.transaction_id


class TestCreateAndList:
    def test_create_persists(self, session, users):
        created = _add(session, "u1", "99.90", "expense", "food", date(2024, 3, 1), "Lunch")

        stored = repo.get_transaction_for_user(session, "u1", created.transaction_id)
        assert stored is not None
        assert stored.value == Decimal("99.90")
        assert stored.description == "Lunch"

    def test_list_scoped_to_owner(self, session, users):
        _add(session, "u1", 10, "expense", "food", date(2024, 3, 1))
        _add(session, "u2", 20, "expense", "food", date(2024, 3, 1))

        page = list_transactions(session, "u1", TransactionFilter())
        assert page.total == 1
        assert all(t.user_id == "u1" for t in page.items)

    def test_list_orders_newest_first(self, session, users):
        _add(session, "u1", 1, "expense", "food", date(2024, 1, 1))
        _add(session, "u1", 2, "expense", "food", date(2024, 3, 1))
        _add(session, "u1", 3, "expense", "food", date(2024, 2, 1))

        page = list_transactions(session, "u1", TransactionFilter())
        assert [t.date.month for t in page.items] == [3, 2, 1]

    def test_pagination(self, session, users):
        for day in range(1, 8):
            _add(session, "u1", day, "expense", "food", date(2024, 1, day))

        page = list_transactions(session, "u1", TransactionFilter(), page=2, limit=3)
        assert page.total == 7
        assert page.pages == 3
        assert [t.date.day for t in page.items] == [4, 3, 2]

    def test_filters(self, session, users):
        _add(session, "u1", 100, "income", "salary", date(2024, 1, 5))
        _add(session, "u1", 10, "expense", "food", date(2024, 1, 10))
        _add(session, "u1", 20, "expense", "transport", date(2024, 2, 10))

        by_type = list_transactions(session, "u1", TransactionFilter(type="expense"))
        assert by_type.total == 2

        by_category = list_transactions(session, "u1", TransactionFilter(category="food"))
        assert by_category.total == 1

        by_date = list_transactions(
            session,
            "u1",
            TransactionFilter(start_date=date(2024, 1, 10), end_date=date(2024, 2, 10)),
        )
        assert by_date.total == 2

    def test_invalid_filter_rejected(self, session, users):
        with pytest.raises(TransactionValidationError):
            list_transactions(session, "u1", TransactionFilter(type="expense", category="salary"))

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (1, 101)])
    def test_invalid_pagination_rejected(self, session, users, page, limit):
        with pytest.raises(TransactionValidationError):
            list_transactions(session, "u1", TransactionFilter(), page=page, limit=limit)

    def test_empty_listing_has_zero_pages(self, session, users):
        page = list_transactions(session, "u1", TransactionFilter())
        assert page.total == 0
        assert page.pages == 0


class TestDelete:
    def test_owner_can_delete(self, session, users):
        created = _add(session, "u1", 10, "expense", "food", date(2024, 1, 1))

        assert delete_transaction(session, "u1", created.transaction_id) is True
        assert repo.get_transaction_for_user(session, "u1", created.transaction_id) is None

    def test_other_user_gets_not_found(self, session, users):
        created = _add(session, "u1", 10, "expense", "food", date(2024, 1, 1))

        assert delete_transaction(session, "u2", created.transaction_id) is False
        assert repo.get_transaction_for_user(session, "u1", created.transaction_id) is not None

    def test_missing_record(self, session, users):
        assert delete_transaction(session, "u1", "does-not-exist") is False
