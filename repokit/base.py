"""Repository base class.

:class:`RepositoryBase` is the generic orchestrator between application code
and a storage backend:

- reads compile a criteria with :func:`~repokit.query_builder.build_query`
  and delegate to the model handle
- writes strip protected fields, run the before hook, optionally validate,
  mutate, then run the after hook
- backend failures leave as :class:`~repokit.exceptions.BackendError`
  labelled with the model name

Concrete repositories bind a model name::

    class UserRepository(RepositoryBase):
        name = "users"

        def __init__(self) -> None:
            super().__init__("User", validator=SchemaValidator(user_schema))
"""

import logging

import typing as t
from dataclasses import dataclass, field
from typing import Any

from .config import RepositorySettings
from .criteria import Criteria, IdentityCriteria
from .depends import depends
from .exceptions import (
    BackendError,
    RecordNotFoundError,
    RepositoryConfigurationError,
    RepositoryException,
    RepositoryValidationError,
)
from .hooks import DiagnosticSaveHooks, SaveHooks, SavePhase
from .models import ModelHandle, ModelProvider
from .query_builder import build_query
from .validation import ValidationOutcome, Validator

logger = logging.getLogger(__name__)


@dataclass
class Page:
    """One page of records together with the total match count."""

    rows: list[Any] = field(default_factory=list)
    count: int = 0
    page: int = 1
    page_size: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def total_pages(self) -> int:
        return (self.count + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


class RepositoryBase:
    """Base repository providing CRUD access to one model.

    Attributes:
        name: Name the repository is registered under, defaults to the
            class name
        model: Backend handle of the model
        validator: Optional validation capability
        auto_validation: Validate payloads automatically before writes
        hooks: Strategy invoked around writes
    """

    name: str | None = None

    def __init__(
        self,
        model: str,
        models: ModelProvider | None = None,
        validator: Validator | None = None,
        hooks: SaveHooks | None = None,
        auto_validation: bool | None = None,
        settings: RepositorySettings | None = None,
        name: str | None = None,
    ) -> None:
        self.settings = settings or depends.get_sync(RepositorySettings)
        self.name = name or self.name or type(self).__name__
        self._model_name = model
        self.model: ModelHandle = self._resolve_model(model, models)
        self.validator = validator
        self.auto_validation = (
            self.settings.auto_validation
            if auto_validation is None
            else auto_validation
        )
        self.hooks: SaveHooks = hooks or DiagnosticSaveHooks()

    @property
    def model_name(self) -> str:
        return self._model_name

    def _resolve_model(
        self,
        model: str,
        models: ModelProvider | None,
    ) -> ModelHandle:
        if models is None:
            try:
                models = depends.get_sync(ModelProvider)
            except Exception as e:
                msg = "No model provider registered"
                raise RepositoryConfigurationError(msg, model, e) from e

        handle = models.get(model)
        if handle is None:
            msg = f"Model '{model}' is not registered"
            raise RepositoryConfigurationError(msg, model)
        return handle

    def _handle_error(self, error: Exception, operation: str) -> t.NoReturn:
        """Re-raise a failure as a repository exception."""
        if isinstance(error, RepositoryException):
            raise error

        logger.debug(f"{self._model_name}.{operation} failed: {error!r}")
        message = str(error) or type(error).__name__
        raise BackendError(message, self._model_name, error) from error

    # Validation

    def pick_data(
        self,
        data: dict[str, Any],
        create_mode: bool = False,
    ) -> dict[str, Any]:
        """Restrict a payload to the fields accepted by the schema.

        Without a validator the payload is returned as a shallow copy.
        """
        if self.validator is None:
            return dict(data)
        allowed = self.validator.fields(create_mode)
        return {key: data[key] for key in allowed if key in data}

    def validate(
        self,
        data: dict[str, Any],
        create_mode: bool = False,
    ) -> ValidationOutcome:
        """Validate a payload, trivially valid without a validator."""
        if self.validator is None:
            return ValidationOutcome(error=None, value=data)
        return self.validator.validate(data, create_mode)

    async def _auto_validate(
        self,
        data: dict[str, Any],
        phase: SavePhase,
        original_data: dict[str, Any] | None = None,
    ) -> ValidationOutcome:
        """Validate a write payload, raising when it is rejected.

        For updates ``original_data`` holds the located record's values so
        that a partial payload is validated as a complete record.
        """
        create_mode = phase in (SavePhase.CREATE, SavePhase.BULK_CREATE)
        to_validate = dict(original_data or {}) | data

        outcome = self.validate(self.pick_data(to_validate, create_mode), create_mode)
        if not outcome.is_valid:
            msg = f"Validation failed on {phase.value}"
            raise RepositoryValidationError(msg, self._model_name, outcome.error)
        return outcome

    async def _before_save(self, model: Any, phase: SavePhase) -> Any:
        """Run the before hook, rejecting a hook that returns nothing."""
        result = await self.hooks.before_save(model, phase)
        if result is None:
            msg = f"before_save hook returned None on {phase.value}"
            raise RepositoryConfigurationError(msg, self._model_name)
        return result

    def _remove_protected_fields(self, data: dict[str, Any]) -> dict[str, Any]:
        """Return a copy of the payload without system-managed fields."""
        protected = self.settings.protected_fields
        return {key: value for key, value in data.items() if key not in protected}

    # Reads

    async def all(self, criteria: Criteria | None = None) -> list[Any]:
        """Return every record matching the criteria.

        Raises:
            BackendError: If the backend fails
        """
        try:
            return list(await self.model.find_all(build_query(criteria)))
        except Exception as e:
            self._handle_error(e, "all")

    async def all_paginated(
        self,
        criteria: Criteria | None = None,
        page: int | None = 1,
        page_size: int | None = None,
    ) -> Page:
        """Return one page of matching records and the total count.

        Args:
            criteria: The criteria used to filter data
            page: Page number (1-based), falsy values mean the first page
            page_size: Records per page, falsy values mean the default size

        Raises:
            BackendError: If the backend fails
        """
        page = page or self.settings.default_page
        page_size = page_size or self.settings.default_page_size

        descriptor = build_query(criteria)
        descriptor["offset"] = (page - 1) * page_size
        descriptor["limit"] = page_size

        try:
            rows, count = await self.model.find_and_count_all(descriptor)
        except Exception as e:
            self._handle_error(e, "all_paginated")
        return Page(rows=list(rows), count=count, page=page, page_size=page_size)

    async def one(self, criteria: Criteria | None = None) -> Any | None:
        """Return the first record matching the criteria, or None.

        Raises:
            BackendError: If the backend fails
        """
        try:
            return await self.model.find_one(build_query(criteria))
        except Exception as e:
            self._handle_error(e, "one")

    async def one_by_id(self, id: Any, transaction: Any = None) -> Any | None:  # noqa: A002
        """Return the record with the given ID, or None."""
        return await self.one(IdentityCriteria(id, transaction))

    # Writes

    async def create(
        self,
        data: dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Create a new record.

        Args:
            data: The values to store; protected fields are ignored
            options: Backend options (``include``, ``transaction``),
                forwarded verbatim

        Raises:
            RepositoryValidationError: If auto validation rejects the payload
            RepositoryConfigurationError: If the before hook returns None
            BackendError: If the backend fails
        """
        payload = self._remove_protected_fields(data)
        payload = await self._before_save(payload, SavePhase.CREATE)

        try:
            if self.auto_validation:
                await self._auto_validate(payload, SavePhase.CREATE)
            record = await self.model.create(
                payload,
                options if options is not None else {},
            )
        except Exception as e:
            self._handle_error(e, "create")

        return await self.hooks.after_save(record, SavePhase.CREATE, payload)

    async def bulk_create(
        self,
        data: t.Sequence[dict[str, Any]],
        options: dict[str, Any] | None = None,
    ) -> list[Any]:
        """Create several records in one backend call.

        Raises:
            RepositoryValidationError: If auto validation rejects a payload
            BackendError: If the backend fails
        """
        payloads = [self._remove_protected_fields(element) for element in data]
        payloads = await self._before_save(payloads, SavePhase.BULK_CREATE)

        try:
            if self.auto_validation:
                for element in payloads:
                    await self._auto_validate(element, SavePhase.BULK_CREATE)
            records = await self.model.bulk_create(
                payloads,
                options if options is not None else {},
            )
        except Exception as e:
            self._handle_error(e, "bulk_create")

        return await self.hooks.after_save(
            list(records),
            SavePhase.BULK_CREATE,
            payloads,
        )

    async def update(
        self,
        id: Any,  # noqa: A002
        data: dict[str, Any],
        transaction: Any = None,
    ) -> Any:
        """Update the record with the given ID."""
        return await self.update_by_criteria(IdentityCriteria(id, transaction), data)

    async def update_by_criteria(
        self,
        criteria: Criteria,
        data: dict[str, Any],
    ) -> Any:
        """Update the first record matching the criteria.

        The record is located first and saved afterwards without any lock;
        concurrent writers are only isolated when the criteria carries a
        transaction.

        Raises:
            RecordNotFoundError: If no record matches
            RepositoryValidationError: If auto validation rejects the merge
            BackendError: If the backend fails
        """
        payload = self._remove_protected_fields(data)
        payload = await self._before_save(payload, SavePhase.UPDATE)

        record = await self.one(criteria)
        if record is None:
            raise RecordNotFoundError(self._model_name, criteria)

        try:
            if self.auto_validation:
                await self._auto_validate(payload, SavePhase.UPDATE, record.to_dict())
            for key, value in payload.items():
                setattr(record, key, value)
            await record.save()
        except Exception as e:
            self._handle_error(e, "update")

        return await self.hooks.after_save(record, SavePhase.UPDATE, payload)

    async def delete(self, id: Any, transaction: Any = None) -> Any:  # noqa: A002
        """Delete the record with the given ID."""
        return await self.delete_by_criteria(IdentityCriteria(id, transaction))

    async def delete_by_criteria(self, criteria: Criteria) -> Any:
        """Delete the first record matching the criteria.

        Like updates, the locate and destroy steps are not locked together.

        Returns:
            The destroyed record, as returned by the before hook

        Raises:
            RecordNotFoundError: If no record matches
            RepositoryConfigurationError: If the before hook returns None
            BackendError: If the backend fails
        """
        record = await self.one(criteria)
        if record is None:
            raise RecordNotFoundError(self._model_name, criteria)

        record = await self._before_save(record, SavePhase.DELETE)

        try:
            await record.destroy()
        except Exception as e:
            self._handle_error(e, "delete")

        return await self.hooks.after_save(record, SavePhase.DELETE)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, model={self._model_name!r})"
