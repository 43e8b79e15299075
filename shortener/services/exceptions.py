"""Exceptions for the URL shortener service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.
"""


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class URLError(ServiceError):
    """Base exception for URL-related errors."""
    pass


class URLNotFoundError(URLError):
    """No mapping exists for the requested id."""
    pass


class URLCreationError(URLError):
    """Error occurred during URL creation."""
    pass


class StorageUnavailableError(URLCreationError):
    """The store could not be reached or did not answer in time."""
    pass
