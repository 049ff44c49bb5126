"""
Word frequency statistics for note text.

Tokenization:
    1. split on runs of ASCII whitespace (space, \\t, \\n, \\v, \\f, \\r);
       other Unicode spaces such as NBSP stay inside the token
    2. delete ASCII punctuation (string.punctuation) anywhere in the token
    3. lower-case
    4. drop tokens left empty

Ordering: count descending, then word ascending. The order is part of the
result, so it is returned as a list of pairs rather than a mapping.
"""

import re
import string
from collections import Counter
from typing import List

from notesapp.domain import WordCount

_WHITESPACE = re.compile(r"[ \t\n\x0b\f\r]+")
_STRIP_PUNCTUATION = str.maketrans("", "", string.punctuation)


def tokenize(text: str) -> List[str]:
    tokens = []
    for raw in _WHITESPACE.split(text):
        token = raw.translate(_STRIP_PUNCTUATION).lower()
        if token:
            tokens.append(token)
    return tokens


def word_frequencies(text: str) -> List[WordCount]:
    """
    Count words in `text`.

    >>> word_frequencies("note is just a note!")
    [WordCount(word='note', count=2), WordCount(word='a', count=1), WordCount(word='is', count=1), WordCount(word='just', count=1)]
    """
    counts = Counter(tokenize(text or ""))
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [WordCount(word, count) for word, count in ordered]
