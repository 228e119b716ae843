"""ContextVar-based conversion configuration for fhxml.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per Converter call and read by the parser, the renderer
and the file driver.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and concurrent conversions cannot see each other's
    settings.

Usage:
    # In Converter
    converter = Converter(ConvertConfig(indent="  "))
    xml = converter("MODULE {}")  # Sets config internally via ContextVar

    # Direct usage
    from fhxml.config import ConvertConfig, convert_config_context

    with convert_config_context(ConvertConfig(wrap_root=True)):
        xml = render(parse(source))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ConvertConfig:
    """Immutable conversion configuration.

    Attributes:
        indent: Indentation unit written once per nesting depth
        wrap_root: Wrap rendered output in a single FHX_ROOT element
        max_depth: Maximum element nesting accepted by the parser, lowered
            to what the interpreter recursion limit allows
        input_encoding: Encoding used to read FHX files
        output_encoding: Encoding used to write XML files

    """

    indent: str = "\t"
    wrap_root: bool = False
    max_depth: int = 100
    input_encoding: str = "utf-16"
    output_encoding: str = "utf-8"

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ConvertConfig":
        """Create ConvertConfig from dictionary.

        Only includes keys that are valid ConvertConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = ConvertConfig.from_dict({"indent": "  ", "colour": "red"})
            >>> config.indent
            '  '

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ConvertConfig = ConvertConfig()

_convert_config: ContextVar[ConvertConfig] = ContextVar(
    "convert_config",
    default=_DEFAULT_CONFIG,
)


def get_convert_config() -> ConvertConfig:
    """Get current conversion configuration (thread-local)."""
    return _convert_config.get()


def set_convert_config(config: ConvertConfig) -> None:
    """Set conversion configuration for current context."""
    _convert_config.set(config)


def reset_convert_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.
    """
    _convert_config.set(_DEFAULT_CONFIG)


@contextmanager
def convert_config_context(config: ConvertConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config on exit, even if an exception is raised.

    Example:
        >>> with convert_config_context(ConvertConfig(indent="  ")):
        ...     get_convert_config().indent
        '  '

    """
    previous = _convert_config.get()
    _convert_config.set(config)
    try:
        yield
    finally:
        _convert_config.set(previous)


__all__ = [
    "ConvertConfig",
    "convert_config_context",
    "get_convert_config",
    "reset_convert_config",
    "set_convert_config",
]
