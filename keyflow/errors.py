from __future__ import annotations


class KeyflowError(Exception):
    """Base class for keyflow errors."""


class ConfigError(KeyflowError):
    """Session configuration is unusable; raised before a session starts."""


class Exhausted(KeyflowError):
    """No prompts are left to pop. Normal end of a chunk-mode session."""
