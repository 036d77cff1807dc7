"""Source location tracking for inline nodes.

Provides SourceLocation dataclass for tracking positions in inline source.
Every node produced by the parser carries one, so consumers can map spans
back to the text they came from.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location of a node.

    ``offset``/``end_offset`` are 0-indexed character offsets into the inline
    source (half-open). ``lineno`` and ``col_offset`` are 1-indexed and
    describe the start position; soft line breaks inside one inline block
    advance the line number.

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        offset: Absolute start offset in the inline source
        end_offset: Absolute end offset in the inline source (exclusive)
        source_file: Source file path (optional)

    Examples:
        >>> loc = SourceLocation(lineno=1, col_offset=5, offset=4, end_offset=9)
        >>> str(loc)
        '1:5'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for messages.

        Returns:
            Formatted string like "notes.txt:2:7" or "2:7"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    def span_to(self, end: SourceLocation) -> SourceLocation:
        """Create a new location spanning from this location to the end of ``end``.

        Args:
            end: Location whose end becomes the end of the new span

        Returns:
            New SourceLocation with this start and end's end offset
        """
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset,
            offset=self.offset,
            end_offset=end.end_offset or end.offset,
            source_file=self.source_file,
        )

    @property
    def length(self) -> int:
        """Number of source characters covered."""
        return max(self.end_offset - self.offset, 0)

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create an unknown/placeholder location.

        Use for nodes created synthetically, e.g. by ``transform`` callbacks.
        """
        return cls(lineno=0, col_offset=0)
