"""Decorator for wrapping service calls in tracing spans"""
from collections.abc import Callable
from functools import wraps

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Keyword arguments never copied onto spans
_SENSITIVE_ARGS = frozenset({"password", "admin_password", "token", "secret"})


def traced(operation_name: str | None = None, attributes: dict | None = None):
    """
    Decorator to create a span around an async function

    Usage:
        @traced("session.authenticate")
        async def authenticate(self, company_code: str, username: str, password: str):
            ...

    Args:
        operation_name: Name of the span (defaults to module.function)
        attributes: Additional attributes to add to the span
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            tracer = trace.get_tracer(func.__module__)
            span_name = operation_name or f"{func.__module__}.{func.__name__}"

            with tracer.start_as_current_span(span_name) as span:
                if attributes:
                    for key, value in attributes.items():
                        span.set_attribute(key, value)

                for key, value in kwargs.items():
                    if not key.startswith("_") and key not in _SENSITIVE_ARGS:
                        span.set_attribute(f"arg.{key}", str(value))

                try:
                    result = await func(*args, **kwargs)
                    span.set_status(Status(StatusCode.OK))
                    return result
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise

        return wrapper

    return decorator
