# ABOUTME: Duplicate-purchase detection package for Hondana.
# ABOUTME: Exports the scored matcher, its result types, and the collection check.

from hondana.matching.collection import BookCollection, FetchFailedError, check_collection
from hondana.matching.duplicates import (
    InvalidArgumentError,
    MatchOptions,
    MatchReason,
    MatchResult,
    ReasonCode,
    find_potential_duplicates,
)

__all__ = [
    "BookCollection",
    "FetchFailedError",
    "InvalidArgumentError",
    "MatchOptions",
    "MatchReason",
    "MatchResult",
    "ReasonCode",
    "check_collection",
    "find_potential_duplicates",
]
