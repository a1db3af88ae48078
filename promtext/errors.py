"""Errors raised while encoding values to the Prometheus text format"""


class PrometheusError(Exception):
    """Base class for all encoder errors"""


class WriteError(PrometheusError):
    """The output sink rejected a write"""
    
    def __init__(self, cause: BaseException):
        super().__init__(f"failed to write to output: {cause}")
        self.cause = cause


class EncodingError(PrometheusError):
    """The input value cannot be represented as metrics"""
    
    def __init__(self, message: str, path: str = ""):
        if path:
            message = f"{message} (at '{path}')"
        super().__init__(f"encoding failed: {message}")
        self.path = path


class TextValidityError(PrometheusError):
    """The assembled output is not valid UTF-8 text"""


class MetadataError(PrometheusError):
    """A metadata table could not be loaded"""
