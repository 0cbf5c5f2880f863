"""
Tests for the shared field validators.
"""

import pytest
from django.core.exceptions import ValidationError

from core.validators import validate_clock_time, validate_hex_color, validate_no_html


class TestValidateHexColor:
    """Tests for validate_hex_color()."""

    @pytest.mark.parametrize("value", ["#5865F2", "#000000", "#abcdef"])
    def test_valid(self, value):
        validate_hex_color(value)

    @pytest.mark.parametrize("value", ["5865F2", "#FFF", "#GGGGGG", "blue"])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            validate_hex_color(value)


class TestValidateClockTime:
    """Tests for validate_clock_time()."""

    @pytest.mark.parametrize("value", ["00:00", "08:30", "23:59"])
    def test_valid(self, value):
        validate_clock_time(value)

    @pytest.mark.parametrize("value", ["24:00", "8:30", "12:60", "10pm"])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            validate_clock_time(value)


class TestValidateNoHtml:
    """Tests for validate_no_html()."""

    def test_plain_text(self):
        validate_no_html("Moderators < 5")

    def test_rejects_tags(self):
        with pytest.raises(ValidationError):
            validate_no_html("<script>alert(1)</script>")
