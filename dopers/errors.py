from __future__ import annotations


class DopersError(Exception):
    """Base class for every error raised by the scatterplot pipeline."""


class LoadError(DopersError):
    """The race results could not be fetched or the payload has the wrong shape."""


class ParseError(DopersError, ValueError):
    """A Year or Time field could not be parsed."""


class EmptyDatasetError(DopersError, ValueError):
    """Scales were requested for an empty sequence of points."""
