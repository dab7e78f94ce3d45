# Models package: split into domain modules and re-exported here
from .base import Base, TimestampMixin
from .person import Person
from .auth import AuthSession, AuthUser, Permission, ROLE_PERMISSIONS, UserRole
from .engine import sqlite_engine, initialize_db

__all__ = [
    "Base",
    "TimestampMixin",
    "Person",
    "AuthSession",
    "AuthUser",
    "Permission",
    "ROLE_PERMISSIONS",
    "UserRole",
    "sqlite_engine",
    "initialize_db",
]
