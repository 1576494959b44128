from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Request bodies use the frontend's camelCase keys; unknown keys
# (userId, creatorId, ...) are dropped silently
class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )
