"""HTTP middleware shared by the API and the web front end."""

from recipe_book.core.middleware.logging import LoggingMiddleware
from recipe_book.core.middleware.request_id import RequestIDMiddleware
from recipe_book.core.middleware.security_headers import SecurityHeadersMiddleware
from recipe_book.core.middleware.timing import TimingMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "TimingMiddleware",
]
