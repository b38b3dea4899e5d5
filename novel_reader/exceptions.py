"""Exception hierarchy for the Novel Reader application."""


class NovelReaderError(Exception):
    """Base class for all application errors."""


class ParseError(NovelReaderError, ValueError):
    """A manuscript could not be turned into a novel record."""


class EmptyInputError(ParseError):
    """The manuscript contains no non-blank lines."""


class NoChaptersFoundError(ParseError):
    """Segmentation and its fallback produced zero chapters."""


class UnsupportedFormatError(ParseError):
    """The file extension or format tag is not a supported input format."""


class NovelNotFoundError(NovelReaderError, LookupError):
    """No stored novel has the requested id."""
