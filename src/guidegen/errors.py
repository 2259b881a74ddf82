"""Exceptions raised while generating guide artifacts."""

from typing import Optional


class GuidegenError(Exception):
    """Base class for guidegen errors."""


class UnsupportedFormatError(GuidegenError):
    """A recognized but no longer supported source format was found.

    Fatal for the whole run: skipping the file would silently drop its
    content from the published site.
    """


class SourceStructureError(GuidegenError, ValueError):
    """The annotation structure of a source file is malformed.

    Recoverable: the file is reported and skipped, the batch continues.
    """

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class MissingDirectiveError(GuidegenError, KeyError):
    """A required directive is missing, or its value names no output location."""

    def __init__(self, directive: str, source: str, value: Optional[str] = None):
        self.directive = directive
        self.source = source
        self.value = value
        if value is None:
            message = f"{source} has no @file:{directive} directive"
        else:
            message = f"{source} has an unusable @file:{directive} value {value!r}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would repr() the message
        return self.args[0]
