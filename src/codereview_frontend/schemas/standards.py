"""Standard set and classification schemas."""

from pydantic import BaseModel, Field

from .base import ApiModel


class StandardSet(ApiModel):
    """A named collection of coding standards sourced from a repository."""

    id: str = Field(alias="_id")
    name: str
    repository_url: str
    custom_prompt: str | None = None


class StandardSetCreate(BaseModel):
    """Request body for creating a standard set."""

    name: str
    repository_url: str
    custom_prompt: str = ""


class Classification(ApiModel):
    """A tag used to categorise standard sets."""

    id: str = Field(alias="_id")
    name: str
