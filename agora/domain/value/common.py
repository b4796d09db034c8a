"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Base class for all value objects.

    Value objects are immutable and compared by value, not identity, so they
    can be shared freely between derived trees, ranked lists and state.
    """

    model_config = ConfigDict(frozen=True)
