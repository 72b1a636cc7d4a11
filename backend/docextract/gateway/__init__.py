"""
API Gateway Module

Single entry point for HTTP requests: middleware, exception handlers and routers.
"""
from .gateway import APIGateway

__all__ = ["APIGateway"]
