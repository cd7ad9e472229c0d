from structhttplog.capture import LimitBuffer
from structhttplog.config import Options, Settings, with_concise, with_skip_headers
from structhttplog.entry import RequestLogEntry, get_log_entry
from structhttplog.log_config import configure_logging
from structhttplog.middleware import RequestLoggingMiddleware, ResponseRecorder, new_middleware
from structhttplog.recoverer import Recoverer
from structhttplog.status import status_label, status_level
from structhttplog.tree import FieldTree, render_field_trees

__all__ = [
    "FieldTree",
    "LimitBuffer",
    "Options",
    "Recoverer",
    "RequestLogEntry",
    "RequestLoggingMiddleware",
    "ResponseRecorder",
    "Settings",
    "configure_logging",
    "get_log_entry",
    "new_middleware",
    "render_field_trees",
    "status_label",
    "status_level",
    "with_concise",
    "with_skip_headers",
]
