"""ContextVar-based parse configuration for realce.

Provides context-local configuration using Python's ContextVars (PEP 567).
Config is set once per Markup instance (or per parse() call) and read by
the scanner, matcher and builder of every inline parse in that context.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed and parallel parses never observe each other's
    configuration.

Usage:
    # In Markup class
    markup = Markup(links=False)
    html = markup("*bold* [not a link](url)")  # Sets config internally

    # Direct parser usage (advanced)
    from realce.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(explicit_markers_enabled=False)):
        nodes = InlineParser("{_kept literal_}").parse()

"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Note: source_file is intentionally excluded, it is per-call state and
    lives on the InlineParser instance.

    Attributes:
        code_spans_enabled: Carve `code` spans out before marker scanning
        autolinks_enabled: Carve <scheme:...> and <user@host> autolinks out
        links_enabled: Carve [text](url) links out (text resolves on its own)
        explicit_markers_enabled: Honour {_ / _} style decorations; when off,
            braces are ordinary text and every marker is a default marker
        text_transformer: Optional callback applied to every final Text node

    """

    code_spans_enabled: bool = True
    autolinks_enabled: bool = True
    links_enabled: bool = True
    explicit_markers_enabled: bool = True
    text_transformer: Callable[[str], str] | None = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Useful for integration where config comes from external sources
        (YAML or TOML files, CLI options). Only keys that are ParseConfig
        fields are used; unknown keys are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                ParseConfig attribute names.

        Returns:
            New ParseConfig instance with values from dict.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "links_enabled": False,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.links_enabled
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration.

    Returns:
        The active ParseConfig for this thread/context.

    """
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Args:
        config: ParseConfig instance to use for this context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Args:
        config: ParseConfig to use within the context.

    Yields:
        None

    Example:
        >>> with parse_config_context(ParseConfig(links_enabled=False)):
        ...     nodes = InlineParser("[a](b)").parse()
        >>> # Previous config restored here

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
