from . import article

__all__ = ["article"]
