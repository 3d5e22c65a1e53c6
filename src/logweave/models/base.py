"""Base model configuration for all Pydantic models."""

from pydantic import BaseModel, ConfigDict


class LogweaveBaseModel(BaseModel):
    """Base model with common configuration.

    Conventions:
    - Timestamps are epoch milliseconds
    - Identifiers are UUID v4 text unless supplied by a caller
    - Field names are lowercase snake_case, camelCase accepted on input
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=True,
    )
