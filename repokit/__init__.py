"""Repository layer: criteria, query compilation and generic CRUD repositories.

This package provides:
- Declarative query criteria compiled into backend-neutral descriptors
- A generic async repository with hooks and optional validation
- A uniform error family for backend, validation and lookup failures
- A registry mapping repository names to singleton instances
"""

from .base import Page, RepositoryBase
from .bootstrap import setup_repositories
from .config import RepositorySettings
from .criteria import Criteria, IdentityCriteria, Operator, SortDirection
from .exceptions import (
    BackendError,
    BackendFailure,
    ErrorDetail,
    ErrorKind,
    RecordNotFoundError,
    RepositoryConfigurationError,
    RepositoryException,
    RepositoryValidationError,
    extract_error_details,
)
from .hooks import DiagnosticSaveHooks, SaveHooks, SavePhase
from .models import ModelCatalog, ModelHandle, ModelProvider, Record
from .query_builder import QueryDescriptor, build_query
from .registry import RepositoryRegistry
from .validation import SchemaValidator, ValidationOutcome, Validator

__all__ = [
    "BackendError",
    "BackendFailure",
    "Criteria",
    "DiagnosticSaveHooks",
    "ErrorDetail",
    "ErrorKind",
    "IdentityCriteria",
    "ModelCatalog",
    "ModelHandle",
    "ModelProvider",
    "Operator",
    "Page",
    "QueryDescriptor",
    "Record",
    "RecordNotFoundError",
    "RepositoryBase",
    "RepositoryConfigurationError",
    "RepositoryException",
    "RepositoryRegistry",
    "RepositorySettings",
    "RepositoryValidationError",
    "SaveHooks",
    "SavePhase",
    "SchemaValidator",
    "SortDirection",
    "ValidationOutcome",
    "Validator",
    "build_query",
    "extract_error_details",
    "setup_repositories",
]
