"""Data quality module."""

from quality.ttm_checks import TTMValidation, validate_ttm_data

__all__ = [
    "TTMValidation",
    "validate_ttm_data",
]
