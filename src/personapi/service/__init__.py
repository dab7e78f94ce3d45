from .cache import CachedPersonQueryService
from .query import PersonQuery, PersonQueryService

__all__ = ["CachedPersonQueryService", "PersonQuery", "PersonQueryService"]
