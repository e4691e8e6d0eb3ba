"""
Exception hierarchy for TagConf.

This module defines all custom exceptions used throughout the package,
providing clear error messages and proper inheritance structure.
"""

from typing import Optional, Any, Dict, Sequence


class TagConfError(Exception):
    """Base exception for all TagConf errors.

    This is the root exception class that all other TagConf exceptions
    inherit from. It provides enhanced error reporting with optional
    context information.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        """Initialize TagConf error.

        Parameters
        ----------
        message : str
            Primary error message
        details : dict, optional
            Additional context information
        cause : Exception, optional
            Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        base_msg = self.message

        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            base_msg += f" (Details: {details_str})"

        if self.cause:
            base_msg += f" (Caused by: {self.cause})"

        return base_msg

    def add_detail(self, key: str, value: Any) -> "TagConfError":
        """Add detail information to the error.

        Parameters
        ----------
        key : str
            Detail key
        value : Any
            Detail value

        Returns
        -------
        TagConfError
            Self for method chaining
        """
        self.details[key] = value
        return self

    def get_detail(self, key: str, default: Any = None) -> Any:
        """Get detail information from the error.

        Parameters
        ----------
        key : str
            Detail key
        default : Any
            Default value if key not found

        Returns
        -------
        Any
            Detail value or default
        """
        return self.details.get(key, default)


def _type_name(target_type: Any) -> str:
    return getattr(target_type, '__qualname__', None) or repr(target_type)


class ConversionError(TagConfError):
    """Raised when a raw string cannot be converted to the requested type.

    Malformed numbers, unknown boolean literals and unknown locale or enum
    names all end up here. Conversion errors are never silently defaulted.
    """

    def __init__(self, message: str, value: Optional[str] = None,
                 target_type: Optional[Any] = None, key: Optional[str] = None,
                 **kwargs):
        """Initialize conversion error.

        Parameters
        ----------
        message : str
            Conversion error message
        value : str, optional
            Raw value that failed to convert
        target_type : type, optional
            Type the value was being converted to
        key : str, optional
            Configuration key the value was resolved from
        **kwargs
            Additional arguments for base class
        """
        details = kwargs.pop('details', {})
        if key is not None:
            details['key'] = key
        if value is not None:
            details['value'] = value
        if target_type is not None:
            details['target_type'] = _type_name(target_type)

        super().__init__(message, details=details, **kwargs)
        self.value = value
        self.target_type = target_type
        self.key = key

    def with_key(self, key: str) -> "ConversionError":
        """Attach the configuration key the failing value came from."""
        self.key = key
        self.add_detail('key', key)
        return self


class UnsupportedTypeError(TagConfError):
    """Raised when no converter is available for the requested type.

    This signals a caller or registration mistake rather than bad data:
    the type has no registered converter and is not an enum.
    """

    def __init__(self, message: str, target_type: Optional[Any] = None, **kwargs):
        details = kwargs.pop('details', {})
        if target_type is not None:
            details['target_type'] = _type_name(target_type)

        super().__init__(message, details=details, **kwargs)
        self.target_type = target_type


class MissingPropertyError(TagConfError):
    """Raised when a key is found in no store under any active tag.

    Default-valued lookups suppress this error and return the default.
    """

    def __init__(self, message: str, key: Optional[str] = None,
                 tags: Optional[Sequence[str]] = None, **kwargs):
        details = kwargs.pop('details', {})
        if key is not None:
            details['key'] = key
        if tags:
            details['tags'] = list(tags)

        super().__init__(message, details=details, **kwargs)
        self.key = key
        self.tags = tuple(tags or ())


class ConfigurationError(TagConfError):
    """Raised when configuration setup is invalid.

    This exception is used for configuration-related errors such as
    missing resources, invalid settings, or malformed config files.
    """

    def __init__(self, message: str, config_file: Optional[str] = None,
                 parameter: Optional[str] = None, **kwargs):
        """Initialize configuration error.

        Parameters
        ----------
        message : str
            Configuration error message
        config_file : str, optional
            Path to the configuration file with issues
        parameter : str, optional
            Name of the problematic parameter
        **kwargs
            Additional arguments for base class
        """
        details = kwargs.pop('details', {})
        if config_file is not None:
            details['config_file'] = config_file
        if parameter is not None:
            details['parameter'] = parameter

        super().__init__(message, details=details, **kwargs)
        self.config_file = config_file
        self.parameter = parameter


class StoreInitializationError(ConfigurationError):
    """Raised when a configuration store fails to populate its entries.

    Kept distinct from MissingPropertyError so that an unreadable or
    malformed source is never mistaken for an absent key.
    """

    def __init__(self, message: str, store: Optional[str] = None, **kwargs):
        details = kwargs.pop('details', {})
        if store is not None:
            details['store'] = store

        super().__init__(message, details=details, **kwargs)
        self.store = store


class LoggingError(TagConfError):
    """Raised when logging setup fails."""

    def __init__(self, message: str, logger_name: Optional[str] = None,
                 handler_type: Optional[str] = None, **kwargs):
        details = kwargs.pop('details', {})
        if logger_name is not None:
            details['logger_name'] = logger_name
        if handler_type is not None:
            details['handler_type'] = handler_type

        super().__init__(message, details=details, **kwargs)
        self.logger_name = logger_name
        self.handler_type = handler_type
