"""Turn API records into presentation fields for the GOV.UK templates."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ..schemas import CodeReview

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Lowercased display text of statuses that still need polling
IN_FLIGHT_STATUSES = frozenset({"pending", "in progress", "started"})


class ReviewStatus(str, Enum):
    """Known review statuses. Anything else parses to UNKNOWN."""

    PENDING = "pending"
    STARTED = "started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "ReviewStatus":
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return cls.UNKNOWN


class StatusTagColour(str, Enum):
    """GOV.UK tag modifier classes used for review statuses."""

    RED = "govuk-tag--red"
    GREEN = "govuk-tag--green"
    DEFAULT = ""


_TAG_COLOURS = {
    ReviewStatus.FAILED: StatusTagColour.RED,
    ReviewStatus.COMPLETED: StatusTagColour.GREEN,
}


def format_date(timestamp: str | datetime) -> str:
    """Format an ISO timestamp as e.g. ``5 March 2024 at 1:05pm``.

    The time is shown as given; no timezone conversion is applied.
    """
    dt = timestamp if isinstance(timestamp, datetime) else datetime.fromisoformat(timestamp)
    hour = dt.hour % 12 or 12
    period = "am" if dt.hour < 12 else "pm"
    return f"{dt.day} {MONTH_NAMES[dt.month - 1]} {dt.year} at {hour}:{dt.minute:02d}{period}"


def status_tag_class(status: str) -> str:
    """CSS modifier class for a status tag; empty for the default colour."""
    return _TAG_COLOURS.get(ReviewStatus(status), StatusTagColour.DEFAULT).value


def format_status_text(status: str) -> str:
    """Human readable status, e.g. ``in_progress`` -> ``In Progress``."""
    return " ".join(word.capitalize() for word in status.replace("_", " ").split(" "))


def is_in_flight(text: str) -> bool:
    """Whether displayed status text means the review hasn't finished."""
    return text.strip().lower() in IN_FLIGHT_STATUSES


@dataclass
class StatusTag:
    """A displayed status tag for one review.

    Text, accessible label and colour always describe the same status.
    """

    review_id: str
    text: str
    label: str
    css_class: str

    @classmethod
    def for_status(cls, review_id: str, status: str) -> "StatusTag":
        text = format_status_text(status)
        return cls(
            review_id=review_id,
            text=text,
            label=f"Status: {text}",
            css_class=status_tag_class(status),
        )

    @property
    def in_flight(self) -> bool:
        return is_in_flight(self.text)

    def apply(self, status: str) -> bool:
        """Show ``status``. Returns False and leaves the tag alone if unchanged."""
        text = format_status_text(status)
        if text == self.text:
            return False
        self.text = text
        self.label = f"Status: {text}"
        self.css_class = status_tag_class(status)
        return True


@dataclass
class ReviewRow:
    """One row of the code reviews table."""

    review_id: str
    repository_url: str
    href: str
    created: str
    updated: str
    status: StatusTag


def format_review_status(review: CodeReview) -> StatusTag:
    return StatusTag.for_status(review.id, review.status)


def format_reviews_for_table(reviews: Iterable[CodeReview]) -> list[ReviewRow]:
    """Build table rows: repository link, created, updated, status tag."""
    return [
        ReviewRow(
            review_id=review.id,
            repository_url=review.repository_url,
            href=f"/code-reviews/{review.id}",
            created=format_date(review.created_at),
            updated=format_date(review.updated_at),
            status=format_review_status(review),
        )
        for review in reviews
    ]
