"""Error parts package: error codes and structured exception types."""

from .error_code import ErrorCode
from .context_error import ContextEngineError
from .not_found_error import NotFoundError
from .format_error import FormatError
from .configuration_error import ConfigurationError
from .incompatible_switch_error import IncompatibleSwitchError

__all__ = [
    "ErrorCode",
    "ContextEngineError",
    "NotFoundError",
    "FormatError",
    "ConfigurationError",
    "IncompatibleSwitchError",
]
