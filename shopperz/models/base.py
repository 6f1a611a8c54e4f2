"""Base model shared by all storefront entities"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class EntityModel(BaseModel):
    """
    Entities are immutable values: changes produce a new instance via
    model_copy(update=...). JSON uses camelCase keys, Python uses snake_case.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }

    def to_json_dict(self) -> dict:
        """Serialize with the camelCase keys used by durable storage and the API"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
