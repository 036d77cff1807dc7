"""Exception classes for realce.

Every input string is valid markup: unmatched or ambiguous markers fall back
to literal text instead of raising. The exceptions below cover internal
invariant violations and misuse of the tree utilities.
"""

from __future__ import annotations


class RealceError(Exception):
    """Base exception for all realce errors.

    Subclass this for specific error categories.
    """

    pass


class InternalConsistencyError(RealceError):
    """Delimiter stack invariant violated.

    Raised when the stack is asked to truncate at a depth it does not hold,
    or when a candidate is pushed out of position order. Never caused by
    user input; an occurrence is a bug in the matcher.
    """

    def __init__(
        self,
        message: str,
        position: int | None = None,
        stack_size: int | None = None,
    ) -> None:
        """Initialize with optional diagnostic context.

        Args:
            message: Description of the violated invariant
            position: Token index or stack depth involved (optional)
            stack_size: Number of entries on the stack at the time (optional)
        """
        self.message = message
        self.position = position
        self.stack_size = stack_size

        details = []
        if position is not None:
            details.append(f"position={position}")
        if stack_size is not None:
            details.append(f"stack_size={stack_size}")
        suffix = f" ({', '.join(details)})" if details else ""

        super().__init__(f"{message}{suffix}")


class RenderError(RealceError):
    """Error during rendering.

    Raised when a renderer meets a node type it does not know how to emit.
    """

    pass


class SerializationError(RealceError):
    """Error while reconstructing nodes from serialized data.

    Raised when a ``_type`` discriminator is missing or unknown, or when a
    JSON child count runs past the records that follow it.
    """

    pass
