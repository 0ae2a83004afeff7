"""HTTP middleware. Applied in taskflow.main."""

from taskflow.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
