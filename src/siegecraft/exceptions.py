"""Exception hierarchy for Siegecraft."""


class SiegecraftError(Exception):
    """Base exception for all Siegecraft errors."""

    pass


class TemplateError(SiegecraftError):
    """Errors related to template text or template files."""

    pass


class MalformedTemplateError(TemplateError):
    """Template text cannot be turned into a valid structure.

    Raised for unrecognized characters, non-rectangular input, unclosed
    outlines and degenerate (fewer than 3 anchors) structures.
    """

    def __init__(self, reason: str, position: tuple[int, int] | None = None) -> None:
        self.reason = reason
        self.position = position
        if position is None:
            super().__init__(f"Malformed template: {reason}")
        else:
            row, col = position
            super().__init__(f"Malformed template at row {row}, column {col}: {reason}")


class TemplateLoadError(TemplateError):
    """Error loading a template file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load template '{path}': {reason}")


class TemplateSaveError(TemplateError):
    """Error saving generated output."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save output '{path}': {reason}")


class GenerationError(SiegecraftError):
    """Errors raised while resizing a template."""

    pass


class TooSmallError(GenerationError):
    """Target dimension cannot hold the structure's irreducible features."""

    def __init__(self, axis: str, minimum: int, requested: int) -> None:
        self.axis = axis
        self.minimum = minimum
        self.requested = requested
        super().__init__(
            f"Requested {axis} {requested} is below the minimum of {minimum}"
        )


class DegenerateSegmentError(GenerationError):
    """A resized segment collapsed below length 1.

    This is an internal consistency failure; it signals a bug in the
    resizer rather than bad input.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Degenerate segment: {reason}")


class TopologyMismatchError(GenerationError):
    """Resized structure is not isomorphic to its source (internal failure)."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Topology not preserved: {reason}")
