"""SQLAlchemy declarative Base and shared model helpers."""

import enum

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def enum_values(enum_cls: type[enum.StrEnum]) -> list[str]:
    """Return enum member values for SQLAlchemy Enum values_callable."""
    return [e.value for e in enum_cls]
