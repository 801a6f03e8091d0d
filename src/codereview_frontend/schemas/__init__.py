"""Pydantic schemas for code review API payloads."""

from .review import CodeReview, CodeReviewCreate, ComplianceReport, ReviewStatusResponse
from .standards import Classification, StandardSet, StandardSetCreate

__all__ = [
    "Classification",
    "CodeReview",
    "CodeReviewCreate",
    "ComplianceReport",
    "ReviewStatusResponse",
    "StandardSet",
    "StandardSetCreate",
]
