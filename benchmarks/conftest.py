"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest


@pytest.fixture
def real_world_inlines() -> list[str]:
    """Paragraph- and heading-sized inline contents."""
    return [
        "Hello *world*!",
        "This is a paragraph with _emphasis_ and *strong* text.",
        "Use `snake_case_names` for variables, *not* camelCase.",
        "See [the _docs_](https://docs.example.com/a_b) or <help@example.com>.",
        "_foo *bar_ baz* and a* foo bar* stay partly literal.",
        "Explicit {_ padded _} and nested _({_inner_})_ spans.",
        "A line\nwith a soft break and *bold\nacross lines*.",
    ]


@pytest.fixture
def large_inline() -> str:
    """A single inline content of about 100KB."""
    chunk = "Some *strong* words, _emphasis_, `code_span`, snake_case and a* literal *. "
    return chunk * 1400


@pytest.fixture
def deep_nesting() -> str:
    """Marker runs that nest 2000 levels deep."""
    return "*" * 2000 + "a" + "*" * 2000


@pytest.fixture
def unmatched_openers() -> str:
    """Many openers with no closer, all drained at end of input."""
    return "*a _b " * 10000
