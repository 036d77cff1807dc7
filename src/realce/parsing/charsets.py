"""Character sets for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from realce.parsing.charsets import FLANKING_WHITESPACE

    if char in FLANKING_WHITESPACE:  # O(1) lookup
        ...
"""

# Whitespace that blocks a marker from opening (when it follows) or closing
# (when it precedes). Exactly space, tab and line feed; other space-like code
# points such as U+00A0 or U+3000 are ordinary content.
FLANKING_WHITESPACE: frozenset[str] = frozenset(" \t\n")

# ASCII punctuation characters that a backslash turns into literal text
ASCII_PUNCTUATION: frozenset[str] = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

# Emphasis marker characters
MARKER_CHARS: frozenset[str] = frozenset("*_")

# Opening and closing decorations of explicit markers
EXPLICIT_OPEN: str = "{"
EXPLICIT_CLOSE: str = "}"

# Characters that end a plain text run and trigger scanner dispatch
INLINE_SPECIAL: frozenset[str] = frozenset("*_`<[]\\{")


def starts_with_whitespace(text: str) -> bool:
    """Check whether text begins with flanking whitespace.

    Empty text counts as whitespace (boundary of the inline content).

    """
    return not text or text[0] in FLANKING_WHITESPACE


def ends_with_whitespace(text: str) -> bool:
    """Check whether text ends with flanking whitespace.

    Empty text counts as whitespace (boundary of the inline content).

    """
    return not text or text[-1] in FLANKING_WHITESPACE
