"""Base schema with common configuration"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class BaseSchema(BaseModel):
    """Request/response bodies accept and emit camelCase keys"""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
