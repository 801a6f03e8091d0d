"""Code review schemas."""

from pydantic import BaseModel, Field

from .base import ApiModel


class ComplianceReport(ApiModel):
    """Compliance report produced for one standard set."""

    id: str | None = Field(None, alias="_id")
    standard_set_name: str = ""
    report: str = ""


class CodeReview(ApiModel):
    """A code review run against a repository."""

    id: str = Field(alias="_id")
    repository_url: str
    status: str = "pending"
    created_at: str
    updated_at: str
    compliance_reports: list[ComplianceReport] = Field(default_factory=list)


class CodeReviewCreate(BaseModel):
    """Request body for creating a code review."""

    repository_url: str
    standard_sets: list[str] = Field(default_factory=list)


class ReviewStatusResponse(BaseModel):
    """Status payload served to polling clients."""

    id: str
    status: str
