"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ConfigurationError       (configuration.py)
    │   ├── UnknownLevelError
    │   ├── MissingFormatterError
    │   └── InvalidLoggerNameError
    ├── NotFoundError            (lookup.py)
    │   └── HandlerNotAttachedError
    └── DeliveryError            (delivery.py)
        ├── SinkError
        ├── FormattingError
        └── FilterError
"""

from logroute.kernel.errors.base import BaseError
from logroute.kernel.errors.configuration import (
    ConfigurationError,
    InvalidLoggerNameError,
    MissingFormatterError,
    UnknownLevelError,
)
from logroute.kernel.errors.delivery import (
    DeliveryError,
    FilterError,
    FormattingError,
    SinkError,
)
from logroute.kernel.errors.lookup import HandlerNotAttachedError, NotFoundError

__all__ = [
    "BaseError",
    "ConfigurationError",
    "DeliveryError",
    "FilterError",
    "FormattingError",
    "HandlerNotAttachedError",
    "InvalidLoggerNameError",
    "MissingFormatterError",
    "NotFoundError",
    "SinkError",
    "UnknownLevelError",
]
