"""Business logic services."""

from .api_client import CodeReviewApiClient
from .form_validation import (
    FormErrors,
    is_valid_url,
    validate_classification_form,
    validate_code_review_form,
    validate_standard_set_form,
)
from .formatters import (
    ReviewRow,
    ReviewStatus,
    StatusTag,
    format_date,
    format_review_status,
    format_reviews_for_table,
    format_status_text,
    is_in_flight,
    status_tag_class,
)
from .status_reconciler import ReconcilerState, StatusReconciler, has_in_flight

__all__ = [
    "CodeReviewApiClient",
    "FormErrors",
    "ReconcilerState",
    "ReviewRow",
    "ReviewStatus",
    "StatusReconciler",
    "StatusTag",
    "format_date",
    "format_review_status",
    "format_reviews_for_table",
    "format_status_text",
    "has_in_flight",
    "is_in_flight",
    "is_valid_url",
    "status_tag_class",
    "validate_classification_form",
    "validate_code_review_form",
    "validate_standard_set_form",
]
