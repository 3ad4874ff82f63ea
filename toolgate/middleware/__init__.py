from .logging_middleware import RequestLoggingMiddleware, credential_presence

__all__ = [
    "RequestLoggingMiddleware",
    "credential_presence",
]
