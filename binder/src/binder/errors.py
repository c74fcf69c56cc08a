# --- Errors ------------------------------------------------------------------
# Every failure that should stop a generation run derives from BinderError.
# The CLI reports it once and exits without writing output.


class BinderError(RuntimeError):
    """Base class for fatal generation-time errors."""


class GrammarLoadError(BinderError):
    """The tree-sitter Go grammar could not be loaded."""


class SourceReadError(BinderError):
    """The input file could not be read."""


class SourceParseError(BinderError):
    """The input file is not valid Go."""


class UnresolvedTypeError(BinderError):
    """A type expression has a shape the resolver does not understand."""


class UnknownTypeError(BinderError):
    """The requested type name was never seen in the source unit."""

    def __init__(self, type_name: str, known: list[str]):
        self.type_name = type_name
        self.known = known
        hint = ", ".join(known) if known else "none"
        super().__init__(f"Unknown type {type_name!r} (known types: {hint})")


class GenerationError(BinderError):
    """A binding cannot be turned into valid adapter code."""


class OutputWriteError(BinderError):
    """The generated unit could not be written."""
