"""Validate form submissions and shape errors for the GOV.UK error summary."""

import re
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

CLASSIFICATION_NAME_PATTERN = re.compile(r"[A-Za-z0-9\s#.-]+")

URL_SCHEMES = frozenset({"http", "https"})

# Field errors not tied to a single input
GENERAL_ERROR_FIELD = "api"


def is_valid_url(url: str) -> bool:
    """Whether ``url`` is an absolute http(s) URL with a host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme.lower() in URL_SCHEMES and bool(parsed.netloc)


@dataclass
class FormErrors:
    """Field-level error messages keyed by form field name."""

    fields: dict[str, str] = field(default_factory=dict)

    def add(self, field_name: str, message: str) -> None:
        self.fields.setdefault(field_name, message)

    def get(self, field_name: str) -> str | None:
        return self.fields.get(field_name)

    def __bool__(self) -> bool:
        return bool(self.fields)

    @property
    def items(self) -> list[dict[str, str]]:
        """Error summary entries, linking each message to its input."""
        items = []
        for field_name, message in self.fields.items():
            item = {"text": message}
            if field_name != GENERAL_ERROR_FIELD:
                item["href"] = f"#{field_name.replace('_', '-')}"
            items.append(item)
        return items

    @classmethod
    def general(cls, message: str) -> "FormErrors":
        return cls({GENERAL_ERROR_FIELD: message})

    @classmethod
    def from_api(cls, errors: Any) -> "FormErrors":
        """
        Build from an API validation payload.

        Accepts ``{"name": {"message": "..."}}``, ``{"name": "..."}`` or a
        list of ``{"field": ..., "message": ...}`` objects.
        """
        result = cls()
        if isinstance(errors, dict):
            entries = [
                (name, value.get("message") if isinstance(value, dict) else value)
                for name, value in errors.items()
            ]
        elif isinstance(errors, list):
            entries = [
                (e.get("field", GENERAL_ERROR_FIELD), e.get("message"))
                for e in errors
                if isinstance(e, dict)
            ]
        else:
            entries = []
        for name, message in entries:
            if message:
                result.add(str(name), str(message))
        return result


def validate_code_review_form(repository_url: str) -> FormErrors:
    errors = FormErrors()
    if not repository_url:
        errors.add("repository_url", "Enter a repository URL")
    elif not is_valid_url(repository_url):
        errors.add("repository_url", "Enter a valid URL")
    return errors


def validate_standard_set_form(name: str, repository_url: str) -> FormErrors:
    errors = FormErrors()
    if not name:
        errors.add("name", "Enter a standard set name")
    if not repository_url:
        errors.add("repository_url", "Enter a repository URL")
    elif not is_valid_url(repository_url):
        errors.add("repository_url", "Enter a valid URL")
    return errors


def validate_classification_form(name: str) -> FormErrors:
    errors = FormErrors()
    if not name:
        errors.add("name", "Enter a classification name")
    elif not CLASSIFICATION_NAME_PATTERN.fullmatch(name):
        errors.add(
            "name",
            "Classification name can only contain letters, numbers, spaces, "
            "dots, hyphens and hash symbols",
        )
    return errors
