from typing import Any, Callable

# structlog method names for each severity tier.
INFO = "info"
WARNING = "warning"
ERROR = "error"


def status_label(status: int) -> str:
    """Return a short human label for an HTTP status code."""
    if 100 <= status < 300:
        return "OK"
    if 300 <= status < 400:
        return "Redirect"
    if 400 <= status < 500:
        return "Client Error"
    if status >= 500:
        return "Server Error"
    return "Unknown"


def status_level(status: int) -> str:
    """Return the severity tier used to log a response with this status.

    A missing or invalid status (<= 0) is treated as anomalous and logged
    as a warning even though its label is "Unknown".
    """
    if status <= 0:
        return WARNING
    if status < 400:
        return INFO
    if status < 500:
        return WARNING
    return ERROR


def log_func(logger: Any, status: int) -> Callable[..., Any]:
    """Return the bound emit method of *logger* matching *status*."""
    return getattr(logger, status_level(status))
