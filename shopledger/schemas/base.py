from typing import Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt
from pydantic.alias_generators import to_camel

# Money in request bodies must be a JSON number; "50" or true are rejected
Amount = Union[StrictInt, StrictFloat]


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case accepted on input too."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )
