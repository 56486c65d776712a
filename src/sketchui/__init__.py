"""Schema-first UI builder core."""

__version__ = "0.1.0"
