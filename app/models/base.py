"""Shared model configuration."""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys.

    Stored records and API payloads use the same keys as the browser client
    (``completedToday``, ``habitId``); attributes stay snake_case.
    """

    model_config = {"populate_by_name": True, "alias_generator": to_camel}
