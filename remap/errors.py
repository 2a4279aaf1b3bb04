class RemapError(Exception):
    """Base class for errors raised by the remap pipeline."""


class MappingError(RemapError, ValueError):
    """A mapping-table row cannot be compiled."""


class StylesheetError(RemapError, ValueError):
    """A source stylesheet could not be parsed."""


class SourceError(RemapError):
    """A source, mapping or sources file could not be loaded."""
