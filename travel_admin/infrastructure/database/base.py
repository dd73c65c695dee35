"""Declarative base for the document tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
