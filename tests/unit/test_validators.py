"""
Tests for core.validators module.
"""
import pytest

from core.validators import (
    normalize_filter_value,
    validate_choice,
    validate_year,
    validate_month,
    validate_order_id,
    MAX_ORDER_ID_LENGTH,
)
from core.exceptions import ValidationError
from core.models import ALL


class TestNormalizeFilterValue:
    """Tests for normalize_filter_value function."""

    def test_none_is_all(self):
        """None should select all."""
        assert normalize_filter_value(None, "year") == ALL

    @pytest.mark.parametrize("value", ["all", "ALL", " All "])
    def test_all_case_insensitive(self, value):
        """'all' should match regardless of case and whitespace."""
        assert normalize_filter_value(value, "year") == ALL

    def test_strips_whitespace(self):
        assert normalize_filter_value("  2024 ", "year") == "2024"

    def test_empty_string(self):
        """Empty string should raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_filter_value("   ", "month")
        assert "empty" in str(exc_info.value).lower()
        assert exc_info.value.field == "month"

    def test_non_string(self):
        """Non-string should raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_filter_value(2024, "year")
        assert "string" in str(exc_info.value).lower()


class TestValidateChoice:
    """Tests for validate_choice function."""

    def test_valid_choice(self):
        assert validate_choice("Jan", ["Jan", "Feb"], "month") == "Jan"

    def test_all_always_valid(self):
        """ALL should be valid even with no choices."""
        assert validate_choice("all", [], "month") == ALL

    def test_case_sensitive_choices(self):
        """Only 'all' is matched case-insensitively."""
        with pytest.raises(ValidationError):
            validate_choice("jan", ["Jan"], "month")

    def test_invalid_choice_lists_options(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_choice("Mar", ["Jan", "Feb"], "month")
        assert "['Jan', 'Feb']" in str(exc_info.value)
        assert exc_info.value.value == "Mar"

    def test_no_choices(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_choice("Mar", [], "month")
        assert "Only 'all' is available" in str(exc_info.value)

    def test_accepts_generator(self):
        assert validate_choice("b", (c for c in "abc"), "letter") == "b"


class TestValidateYearMonth:
    """Tests for validate_year and validate_month functions."""

    def test_year_field_name(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_year("1999", ["2024"])
        assert exc_info.value.field == "year"

    def test_month_field_name(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_month("Dec", ["Jan"])
        assert exc_info.value.field == "month"

    def test_valid(self):
        assert validate_year("2024", ["2023", "2024"]) == "2024"
        assert validate_month(None, ["Jan"]) == ALL


class TestValidateOrderId:
    """Tests for validate_order_id function."""

    @pytest.mark.parametrize("order_id", ["112-0000001", "A1", "abc_def.9"])
    def test_valid(self, order_id):
        assert validate_order_id(order_id) == order_id

    def test_strips_whitespace(self):
        assert validate_order_id(" 42 ") == "42"

    def test_none(self):
        """None should raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            validate_order_id(None)
        assert "required" in str(exc_info.value).lower()

    def test_empty(self):
        with pytest.raises(ValidationError):
            validate_order_id("  ")

    def test_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_order_id("1" * (MAX_ORDER_ID_LENGTH + 1))
        assert "at most" in str(exc_info.value)

    @pytest.mark.parametrize("order_id", ["../etc", "-1", "a b", "id;drop"])
    def test_invalid_characters(self, order_id):
        with pytest.raises(ValidationError) as exc_info:
            validate_order_id(order_id)
        assert "invalid characters" in str(exc_info.value)
