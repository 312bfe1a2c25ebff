"""Base model configuration for configuration structures."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Frozen base model that rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")
