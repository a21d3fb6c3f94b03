"""Presentation Middleware"""
from .error_handler import error_handlers
from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "error_handlers"]
