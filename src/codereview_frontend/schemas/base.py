"""Shared base for API payload schemas."""

from pydantic import BaseModel, ConfigDict


class ApiModel(BaseModel):
    """Record returned by the code review API.

    The API keys documents by ``_id``; models expose it as ``id`` and
    ignore fields this layer doesn't display.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
