from typing import Any, List, Tuple
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema for the public API: camelCase on the wire, snake_case in Python.

    Rows selected from the database (snake_case columns) validate directly.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PartialUpdateModel(CamelModel):
    """
    Base for PATCH bodies. Only the fields the client actually sent take part
    in the update; unknown fields are a validation error.
    """
    model_config = ConfigDict(extra="forbid")

    def to_field_set(self) -> List[Tuple[str, Any]]:
        """Sent fields as ordered (camelCase name, value) pairs, in declaration order."""
        return list(self.model_dump(by_alias=True, exclude_unset=True).items())


class DeletedResponse(CamelModel):
    """Key of the row removed by a DELETE."""
    deleted: str
