from microblog.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
