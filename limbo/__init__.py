"""LIMBO gallery artist notifier."""

__version__ = "0.1.0"
