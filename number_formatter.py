"""
Number Formatter for PocketCalc
Renders numeric display text with digit grouping
"""
import math
import re

import config

_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_GROUP_RE = re.compile(r"\B(?=(\d{3})+(?!\d))")


def is_number(text):
    """Return True if text is a finite decimal literal"""
    if not isinstance(text, str) or not _NUMBER_RE.fullmatch(text):
        return False
    return math.isfinite(float(text))


def format_number(text, separator=config.GROUPING_SEPARATOR):
    """Insert grouping separators into the integer part of a number.

    Anything that is not a finite number (including the error sentinel) is
    passed through untouched.
    """
    if text in (config.ERROR_TEXT, "Infinity") or not is_number(text):
        return text
    integer, dot, fraction = text.partition(".")
    integer = _GROUP_RE.sub(separator, integer)
    return integer + dot + fraction


def unformat_number(text, separator=config.GROUPING_SEPARATOR):
    """Strip grouping separators added by format_number"""
    return text.replace(separator, "")
