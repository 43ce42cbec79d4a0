"""alwayson exception hierarchy.

All exceptions inherit from AlwaysOnError.
Out-of-mode events are not errors and never raise.
"""


class AlwaysOnError(Exception):
    """Base exception for all alwayson errors."""


class PreconditionError(AlwaysOnError, ValueError):
    """Illegal time usage: negative advance or an instant earlier than the last draw."""


class ConfigError(AlwaysOnError):
    """Configuration file load/validation error."""


class ScriptError(AlwaysOnError):
    """Display script YAML parsing/validation error."""


class ReporterError(AlwaysOnError):
    """Report generation error."""
