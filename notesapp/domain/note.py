"""
Notes Backend: Domain Types
===========================

Plain Python types that move between the store and the service. They carry
no persistence or HTTP concerns: the SQL adapter maps ORM rows to `Note`,
and the schemas module maps `Note` to API views.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, NamedTuple, Optional, Set


class NoteTag(str, Enum):
    """
    Closed set of tags a note can carry.

    Values are the wire/storage representation, so they must never be
    renamed once notes exist.
    """
    PERSONAL = "PERSONAL"
    BUSINESS = "BUSINESS"
    IMPORTANT = "IMPORTANT"


@dataclass
class Note:
    """
    One note record.

    Attributes:
        id:            Store-assigned identifier; None until first insert.
        title:         Note title.
        text:          Note body.
        tags:          Set of tags, never None (empty set when untagged).
        created_date:  UTC creation time, set once on create.
    """
    id: Optional[str] = None
    title: str = ""
    text: str = ""
    tags: Set[NoteTag] = field(default_factory=set)
    created_date: Optional[datetime] = None


class NoteSlice(NamedTuple):
    """One page of notes plus the number of notes matching the filter."""
    notes: List[Note]
    total: int


class WordCount(NamedTuple):
    word: str
    count: int
