"""
Shared Pydantic base for API models.

Fields are declared in snake_case and exposed in camelCase on the wire
(`franchiseId`, `totalRevenue`, ...). Either spelling is accepted on input.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Plain acknowledgement."""
    message: str
