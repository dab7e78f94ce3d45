"""Read-only Person query API.

The top-level package re-exports the settings used to wire the application
(see :func:`personapi.api.main.create_app`).
"""

from .config import Settings, load_settings

__version__ = "0.1.0"

__all__ = ["Settings", "load_settings", "__version__"]
