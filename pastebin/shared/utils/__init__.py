from . import base62

__all__ = ["base62"]
