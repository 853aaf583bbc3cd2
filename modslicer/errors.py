"""
Error types raised by modslicer.

Every error that aborts a run derives from ModSlicerError, so the command line
only has to catch one type.
"""


class ModSlicerError(Exception):
    """Base class for errors that abort a conversion run."""


class ConfigParseError(ModSlicerError):
    """The mapping file is not valid TOML or does not match the schema."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid mapping file {path}: {reason}")


class ArchiveOpenError(ModSlicerError):
    """An archive could not be opened or is not a zip container."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot open archive {path}: {reason}")


class EntryNotFoundError(ModSlicerError):
    """A logical file name is absent from every archive/prefix pair."""

    def __init__(self, name, searched=()):
        self.name = name
        self.searched = list(searched)
        message = f"Entry not found in any archive: {name}"
        if self.searched:
            message += f" (searched {', '.join(self.searched)})"
        super().__init__(message)


class DecodeError(ModSlicerError):
    """Image bytes are not a valid PNG."""


class OutOfBoundsError(ModSlicerError):
    """A mapped atlas cell lies outside the source image."""


class ResourceIOError(ModSlicerError):
    """Reading or writing a file on disk failed."""


class GridPositionError(ValueError):
    """Base class for grid coordinate parsing failures."""


class InvalidFormatError(GridPositionError):
    """Coordinate text is not exactly two characters long."""

    def __init__(self, text):
        self.text = text
        super().__init__(
            f"Grid position must be exactly 2 hex digits, got {len(text)} characters: {text!r}"
        )


class InvalidDigitsError(GridPositionError):
    """Coordinate text contains a character that is not a hex digit."""

    def __init__(self, text):
        self.text = text
        super().__init__(f"Grid position must be hex digits, got {text!r}")
