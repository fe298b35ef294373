# ABOUTME: Book data model package for Hondana.
# ABOUTME: Exports the candidate/stored book types and the ownership format enum.

from hondana.books.platforms import DIGITAL_PLATFORMS, Platform, platform_name
from hondana.books.types import BookFormat, CandidateBook, StoredBook

__all__ = [
    "DIGITAL_PLATFORMS",
    "BookFormat",
    "CandidateBook",
    "Platform",
    "StoredBook",
    "platform_name",
]
