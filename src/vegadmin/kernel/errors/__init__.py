"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError     (application.py)
    │   ├── ValidationError
    │   ├── TimeoutError
    │   ├── SearchError      (vegadmin.application.search.errors)
    │   └── ConfigError      (vegadmin.config.validation)
    └── InfrastructureError  (infrastructure.py)
        ├── SerializationError
        └── ExternalServiceError
"""

from vegadmin.kernel.errors.application import (
    ApplicationError,
    TimeoutError,
    ValidationError,
)
from vegadmin.kernel.errors.base import BaseError
from vegadmin.kernel.errors.infrastructure import (
    ExternalServiceError,
    InfrastructureError,
    SerializationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ExternalServiceError",
    "InfrastructureError",
    "SerializationError",
    "TimeoutError",
    "ValidationError",
]
