"""Declarative base for the reporting models."""

import enum

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


def enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    """Persist enum values instead of member names."""
    return [member.value for member in enum_cls]
