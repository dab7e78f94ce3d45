from .logging import configure, get_logger

__all__ = ["configure", "get_logger"]
