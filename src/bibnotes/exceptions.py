from __future__ import annotations


class BibnotesError(Exception):
    """Base class for errors raised by bibnotes."""


class ConfigError(BibnotesError, ValueError):
    pass


class TemplateNotFoundError(BibnotesError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Template file not found: {path}")


class BibliographyParseError(BibnotesError):
    """The grammar parser rejected a bibliography file."""
