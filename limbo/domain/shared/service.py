"""Base class for domain services."""

from dataclasses import dataclass
from typing import dataclass_transform


@dataclass_transform(kw_only_default=True)
class _ServiceMeta(type):
    """Turns every Service subclass into a keyword-only dataclass.

    Collaborators are passed by name, both by the DI container and in tests,
    so a field with a default may come before a required one.
    """

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict):
        cls = super().__new__(mcs, name, bases, namespace)
        if not any(isinstance(base, mcs) for base in bases):
            return cls
        return dataclass(cls, kw_only=True)


class Service(metaclass=_ServiceMeta):
    """Base for stateless domain services (dispatcher, chat command handler)."""
