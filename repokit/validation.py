"""Payload validation capability.

Repositories validate write payloads through an optional :class:`Validator`.
:class:`SchemaValidator` is the pydantic implementation: it is built from a
schema factory returning the model class to use in creation or update mode,
so the two modes can require different fields::

    def user_schema(create_mode: bool) -> type[BaseModel]:
        return UserCreate if create_mode else UserUpdate

    validator = SchemaValidator(user_schema)
"""

import typing as t
from dataclasses import dataclass
from pydantic import BaseModel, ValidationError
from typing import Any

SchemaFactory = t.Callable[[bool], type[BaseModel]]


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating one payload."""

    error: ValidationError | None
    value: Any

    @property
    def is_valid(self) -> bool:
        return self.error is None


@t.runtime_checkable
class Validator(t.Protocol):
    """Validation capability a repository may be configured with."""

    def fields(self, create_mode: bool = False) -> list[str]:
        """Names of the fields the schema accepts in the given mode."""
        ...

    def validate(
        self,
        payload: dict[str, Any],
        create_mode: bool = False,
    ) -> ValidationOutcome:
        """Validate a payload against the schema of the given mode."""
        ...


class SchemaValidator:
    """Validator backed by pydantic models."""

    def __init__(self, schema: SchemaFactory) -> None:
        self.schema = schema

    def fields(self, create_mode: bool = False) -> list[str]:
        return list(self.schema(create_mode).model_fields)

    def validate(
        self,
        payload: dict[str, Any],
        create_mode: bool = False,
    ) -> ValidationOutcome:
        model_class = self.schema(create_mode)
        try:
            validated = model_class.model_validate(payload)
        except ValidationError as e:
            return ValidationOutcome(error=e, value=payload)
        return ValidationOutcome(error=None, value=validated.model_dump())
