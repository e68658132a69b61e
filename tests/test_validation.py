"""Unit tests for parameter and list-type validation."""

import pytest

from poptape_lists_api.app.core.errors import (
    InvalidItemId,
    InvalidParameter,
    NegativeOffset,
    NonPositiveLimit,
    UnknownListType,
)
from poptape_lists_api.app.core.validation import (
    LIST_TYPES,
    canonical_uuid,
    is_valid_list_type,
    is_valid_uuid,
    normalize_list_type,
    resolve_list_type,
    validate_limit,
    validate_offset,
)


class TestValidateLimit:
    def test_empty_returns_default(self):
        assert validate_limit("", 10, 100) == 10
        assert validate_limit(None, 10, 100) == 10

    def test_above_maximum_is_clamped(self):
        assert validate_limit("150", 10, 100) == 100

    def test_within_bounds_is_returned(self):
        assert validate_limit("1", 10, 100) == 1
        assert validate_limit("100", 10, 100) == 100

    def test_negative_is_rejected(self):
        with pytest.raises(NonPositiveLimit):
            validate_limit("-5", 10, 100)

    def test_zero_is_rejected(self):
        with pytest.raises(NonPositiveLimit):
            validate_limit("0", 10, 100)

    def test_explicit_sign_is_accepted(self):
        assert validate_limit("+5", 10, 100) == 5

    @pytest.mark.parametrize("raw", ["abc", "1.5", "ten", "1_0", " 5", "5 ", "\uff15", "0x10", "+"])
    def test_non_numeric_is_rejected(self, raw):
        with pytest.raises(InvalidParameter) as excinfo:
            validate_limit(raw, 10, 100)
        assert not isinstance(excinfo.value, NonPositiveLimit)


class TestValidateOffset:
    def test_empty_returns_zero(self):
        assert validate_offset("") == 0
        assert validate_offset(None) == 0

    def test_valid_offset(self):
        assert validate_offset("0") == 0
        assert validate_offset("25") == 25

    def test_negative_is_rejected(self):
        with pytest.raises(NegativeOffset):
            validate_offset("-10")

    @pytest.mark.parametrize("raw", ["many", "1_0", " 5", "\uff15", "-"])
    def test_non_numeric_is_rejected(self, raw):
        with pytest.raises(InvalidParameter) as excinfo:
            validate_offset(raw)
        assert not isinstance(excinfo.value, NegativeOffset)


class TestListTypes:
    def test_normalize_trims_and_lowercases(self):
        assert normalize_list_type("  WatchList ") == "watchlist"
        assert normalize_list_type("") == ""

    @pytest.mark.parametrize("list_type", LIST_TYPES)
    def test_vocabulary_is_accepted(self, list_type):
        assert is_valid_list_type(list_type.upper())
        assert resolve_list_type(f" {list_type.title()} ") == list_type

    @pytest.mark.parametrize("raw", ["", "   ", "wishlist", "watchlists", "recentbids"])
    def test_unknown_types_are_rejected(self, raw):
        assert not is_valid_list_type(raw)
        with pytest.raises(UnknownListType):
            resolve_list_type(raw)


class TestUuids:
    def test_valid_uuid(self):
        assert is_valid_uuid("f47ac10b-58cc-4372-a567-0e02b2c3d479")

    @pytest.mark.parametrize("raw", ["", "not-a-uuid", "f47ac10b-58cc-4372-a567", None])
    def test_invalid_uuid(self, raw):
        assert not is_valid_uuid(raw)

    def test_canonical_form_is_lowercase(self):
        assert canonical_uuid("F47AC10B-58CC-4372-A567-0E02B2C3D479") == "f47ac10b-58cc-4372-a567-0e02b2c3d479"

    def test_canonical_rejects_garbage(self):
        with pytest.raises(InvalidItemId):
            canonical_uuid("12345")
