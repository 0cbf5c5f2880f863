"""
Custom validators for DRF serializers.

This module provides domain-agnostic format validators for:
- Colors (hex codes)
- Wall-clock times (24-hour HH:mm)
- Security (XSS prevention in display names)

These validators are generic infrastructure - they have no knowledge
of domain concepts like roles, servers, or notification levels.

Usage:
    from core.validators import validate_clock_time, validate_hex_color

    class RoleSerializer(serializers.Serializer):
        color = serializers.CharField(validators=[validate_hex_color])

Note:
    Validators raise django.core.exceptions.ValidationError; DRF converts
    these into field errors when they run inside a serializer.
"""

from __future__ import annotations

import re

from django.core.exceptions import ValidationError

HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")

# 24-hour clock, hours 00-23 and minutes 00-59
CLOCK_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def validate_hex_color(value: str):
    """
    Validate a six-digit hex color code such as "#5865F2".

    Args:
        value: String to validate

    Raises:
        ValidationError: If format is invalid
    """
    if not HEX_COLOR_PATTERN.match(value):
        raise ValidationError("Color must be a hex code like #5865F2.")


def validate_clock_time(value: str):
    """
    Validate a 24-hour wall-clock time in HH:mm format.

    Args:
        value: String to validate

    Raises:
        ValidationError: If format is invalid
    """
    if not CLOCK_TIME_PATTERN.match(value):
        raise ValidationError("Time must use 24-hour HH:mm format, e.g. 22:00.")


def validate_no_html(value: str):
    """
    Validate that string contains no HTML tags.

    Useful for preventing XSS in display names.

    Args:
        value: String to validate

    Raises:
        ValidationError: If HTML tags found
    """
    if re.search(r"<[^>]+>", value):
        raise ValidationError("HTML tags are not allowed in this field.")
