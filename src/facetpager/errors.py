"""
Errors raised by the paginator.

All validation happens before any page is produced, so callers never
receive a partial set of pages for a malformed call.
"""

from typing import Iterable, Tuple


class FacetPagerError(Exception):
    """Base class for facetpager errors."""


class MissingArgumentError(FacetPagerError, TypeError):
    """A required argument (plot, nrow or ncol) was not provided."""


class InvalidGridShapeError(FacetPagerError, ValueError):
    """nrow / ncol is not a positive integer."""

    def __init__(self, name: str, value):
        self.name = name
        self.value = value
        super().__init__(
            f"Argument \"{name}\" must be a positive integer, got {value!r}"
        )


class UnknownFacetColumnError(FacetPagerError, ValueError):
    """One or more facet names are not columns of the plot data."""

    def __init__(self, columns: Iterable[str]):
        self.columns: Tuple[str, ...] = tuple(columns)
        super().__init__(
            f"The facets: {', '.join(repr(c) for c in self.columns)} "
            "could not be found in the data"
        )
