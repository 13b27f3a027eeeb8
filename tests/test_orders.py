"""Tests for order normalization, the update whitelist and listing filters."""

from datetime import datetime, timezone

import pytest

from order_backend.core.exceptions import ClientError
from order_backend.services.orders import (
    UPDATABLE_FIELDS,
    OrderListQuery,
    build_order_update,
    normalize_order,
    parse_order_id,
)

NOW = datetime(2026, 10, 19, 12, 30, tzinfo=timezone.utc)


class TestNormalizeOrder:
    """Test normalize_order defaults and validation."""

    def test_defaults_applied_for_missing_fields(self) -> None:
        record = normalize_order({"restaurant_number": "7"}, now=NOW)

        assert record == {
            "restaurant_number": "7",
            "table_no": None,
            "items": [],
            "total": 0,
            "payment_mode": "cash",
            "payment_status": "pending",
            "status": "pending",
            "created_at": NOW,
            "placed_at": NOW,
        }

    def test_explicit_zero_total_is_kept(self) -> None:
        record = normalize_order({"restaurant_number": "7", "total": 0})
        assert record["total"] == 0

    def test_numeric_total_is_kept(self) -> None:
        record = normalize_order({"restaurant_number": "7", "total": 12.75})
        assert record["total"] == 12.75

    def test_numeric_string_total_is_converted(self) -> None:
        record = normalize_order({"restaurant_number": "7", "total": "9.5"})
        assert record["total"] == 9.5

    @pytest.mark.parametrize("total", ["free", True, [1], "nan", "inf", "-Infinity", "1e999", float("nan"), float("inf")])
    def test_non_numeric_total_is_client_error(self, total: object) -> None:
        with pytest.raises(ClientError) as exc_info:
            normalize_order({"restaurant_number": "7", "total": total})
        assert exc_info.value.status_code == 400

    def test_null_total_defaults_to_zero(self) -> None:
        record = normalize_order({"restaurant_number": "7", "total": None})
        assert record["total"] == 0

    def test_table_aliases_normalize_to_table_no(self) -> None:
        first = normalize_order({"restaurant_number": "7", "table_no": 4})
        second = normalize_order({"restaurant_number": "7", "table_number": 4})

        assert first["table_no"] == second["table_no"] == 4
        assert "table_number" not in second

    def test_table_no_wins_over_table_number(self) -> None:
        record = normalize_order({"restaurant_number": "7", "table_no": "A1", "table_number": "B2"})
        assert record["table_no"] == "A1"

    def test_numeric_restaurant_number_becomes_text(self) -> None:
        record = normalize_order({"restaurant_number": 7})
        assert record["restaurant_number"] == "7"

    @pytest.mark.parametrize("body", [{}, {"restaurant_number": None}, {"restaurant_number": "  "}])
    def test_missing_restaurant_number_is_client_error(self, body: dict) -> None:
        with pytest.raises(ClientError, match="restaurant_number is required"):
            normalize_order(body)

    def test_items_passed_through_unchanged(self) -> None:
        items = [{"name": "tea", "qty": 1}, {"anything": ["goes"]}]
        record = normalize_order({"restaurant_number": "7", "items": items})
        assert record["items"] == items

    def test_items_must_be_a_list(self) -> None:
        with pytest.raises(ClientError, match="items must be a list"):
            normalize_order({"restaurant_number": "7", "items": "tea"})

    def test_provided_payment_and_status_fields_are_kept(self) -> None:
        record = normalize_order({
            "restaurant_number": "7",
            "payment_mode": "card",
            "payment_status": "paid",
            "status": "confirmed",
        })
        assert (record["payment_mode"], record["payment_status"], record["status"]) == (
            "card", "paid", "confirmed"
        )

    def test_timestamps_share_one_instant(self) -> None:
        record = normalize_order({"restaurant_number": "7"})
        assert record["created_at"] == record["placed_at"]
        assert record["created_at"].tzinfo is not None


class TestParseOrderId:
    """Test parse_order_id."""

    @pytest.mark.parametrize("raw, expected", [("12", 12), (" 3 ", 3), (5, 5), ("-1", -1), ("2147483647", 2147483647)])
    def test_integer_input(self, raw: object, expected: int) -> None:
        assert parse_order_id(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "12abc", "1.5", "", None, True, "1_0", "\u0663", "\uff11", "2147483648", 2 ** 31, "+5"])
    def test_non_integer_input_is_client_error(self, raw: object) -> None:
        with pytest.raises(ClientError, match="invalid order id"):
            parse_order_id(raw)


class TestBuildOrderUpdate:
    """Test the partial update whitelist."""

    def test_whitelist_is_exact(self) -> None:
        assert set(UPDATABLE_FIELDS) == {"status", "payment_status", "table_no", "total", "payment_mode"}

    def test_unknown_fields_are_dropped(self) -> None:
        changes = build_order_update({"status": "served", "foo": "bar"}, now=NOW)
        assert changes == {"status": "served", "updated_at": NOW}

    def test_falsy_values_are_applied(self) -> None:
        changes = build_order_update({"total": 0, "table_no": None}, now=NOW)
        assert changes == {"total": 0, "table_no": None, "updated_at": NOW}

    def test_every_whitelisted_field_is_copied(self) -> None:
        body = {
            "status": "ready",
            "payment_status": "paid",
            "table_no": "9",
            "total": 20,
            "payment_mode": "upi",
        }
        changes = build_order_update(body, now=NOW)
        assert changes == {**body, "updated_at": NOW}

    @pytest.mark.parametrize("body", [{}, {"foo": "bar"}, {"restaurant_number": "8", "id": 3, "items": []}])
    def test_no_updatable_fields_is_client_error(self, body: dict) -> None:
        with pytest.raises(ClientError, match="no updatable fields provided"):
            build_order_update(body)

    @pytest.mark.parametrize("total", ["nan", "1e999", float("inf")])
    def test_non_finite_total_is_client_error(self, total: object) -> None:
        with pytest.raises(ClientError, match="total must be a number"):
            build_order_update({"total": total})

    def test_table_number_alias_is_not_updatable(self) -> None:
        with pytest.raises(ClientError):
            build_order_update({"table_number": "4"})

    def test_updated_at_defaults_to_now(self) -> None:
        changes = build_order_update({"status": "served"})
        assert isinstance(changes["updated_at"], datetime)


class TestOrderListQuery:
    """Test OrderListQuery filters."""

    def test_restaurant_only(self) -> None:
        query = OrderListQuery.from_params("7")
        assert query.filters() == {"restaurant_number": "7"}
        assert (query.order_by, query.descending) == ("id", True)

    def test_with_status(self) -> None:
        query = OrderListQuery.from_params(7, "pending")
        assert query.filters() == {"restaurant_number": "7", "status": "pending"}

    def test_empty_status_means_all_statuses(self) -> None:
        assert OrderListQuery.from_params("7", "").status is None

    def test_missing_restaurant_is_client_error(self) -> None:
        with pytest.raises(ClientError):
            OrderListQuery.from_params(None, "pending")
