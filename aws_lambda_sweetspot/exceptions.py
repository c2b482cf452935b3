"""
Custom exceptions for the AWS Lambda Sweet Spot package.
"""


class SweepException(Exception):
    """Base exception for all sweep-related errors."""
    pass


class ConfigurationError(SweepException):
    """Raised when there's an error in the configuration."""
    pass


class InvalidPayloadError(SweepException):
    """Raised when the Lambda payload is not well-formed JSON."""
    pass


class RemoteError(SweepException):
    """Raised when a call to the Lambda service fails."""
    pass


class AWSPermissionError(RemoteError):
    """Raised when AWS permissions are insufficient."""
    pass


class FunctionNotFoundError(RemoteError):
    """Raised when the target function does not exist."""
    pass


class BaselineCaptureError(SweepException):
    """Raised when the original function configuration cannot be read."""
    pass


class ReconfigurationError(SweepException):
    """Raised when the memory size of the function cannot be changed."""
    pass


class InvocationError(SweepException):
    """Raised when the function cannot be invoked."""
    pass


class RestorationError(SweepException):
    """Raised when the original memory size cannot be put back."""
    pass


class MetricExtractionError(SweepException):
    """Base class for failures while reading the duration out of a log."""
    pass


class EmptyInputError(MetricExtractionError):
    """Raised when there is no log result to parse."""
    pass


class LogDecodeError(MetricExtractionError):
    """Raised when the log result is not valid base64 text."""
    pass


class PatternNotFoundError(MetricExtractionError):
    """Raised when the log has no 'Duration: <x> ms' entry."""
    pass


class NumericParseError(MetricExtractionError):
    """Raised when the captured duration is not a number."""
    pass


class EmptyResultSetError(SweepException):
    """Raised when there is no usable result to select a sweet spot from."""
    pass


class SweepInProgressError(SweepException):
    """Raised when another sweep already holds the target function."""
    pass


class ReportGenerationError(SweepException):
    """Raised when report generation fails."""
    pass


class VisualizationError(SweepException):
    """Raised when visualization generation fails."""
    pass
