from typing import Iterator, List, Set
import re


# Sentence punctuation, commas, and coordinating words split a directive into clauses
CLAUSE_SEPARATOR = re.compile(
    r"[.!?;,]+|\b(?:and\s+then|and|then|also)\b",
    re.IGNORECASE,
)
WORD_PATTERN = re.compile(r"[a-z0-9]+(?:['-][a-z0-9]+)*")

STOPWORDS = frozenset({
    "about", "after", "again", "also", "before", "being", "between", "both",
    "could", "does", "doing", "down", "each", "from", "further", "have",
    "having", "here", "into", "just", "make", "more", "most", "only", "other",
    "over", "same", "should", "some", "such", "than", "that", "their", "them",
    "then", "there", "these", "they", "this", "those", "through", "under",
    "until", "very", "want", "were", "what", "when", "where", "which", "while",
    "will", "with", "would", "your",
})

# Longest suffixes first so "ations" wins over "s"
SUFFIXES = (
    ("ations", ""), ("ation", ""), ("ings", ""), ("ing", ""),
    ("ments", ""), ("ment", ""), ("ness", ""), ("ions", ""), ("ion", ""),
    ("ies", "y"), ("ed", ""), ("es", ""), ("s", ""), ("ly", ""),
)
# "es" is a plural ending only after these
SIBILANTS = ("s", "x", "z", "ch", "sh")
MIN_STEM_LENGTH = 3
MIN_KEYWORD_LENGTH = 4
SPECIFICITY_CLAUSES = 4
SPECIFICITY_WORDS = 20


def stem(word: str) -> str:
    """Strip one common English suffix, keeping at least three characters"""

    word = word.lower()
    for suffix, replacement in SUFFIXES:
        if suffix == "s" and word.endswith("ss"):
            continue
        if suffix == "es" and not word[:-2].endswith(SIBILANTS):
            continue
        if word.endswith(suffix):
            candidate = word[: -len(suffix)] + replacement
            if len(candidate) >= MIN_STEM_LENGTH:
                return candidate
    return word


def tokenize(text: str) -> List[str]:
    """Lower-cased word tokens of text"""
    return WORD_PATTERN.findall(text.lower())


def stems_of(text: str) -> Set[str]:
    return {stem(token) for token in tokenize(text)}


class DirectiveClauses:
    """Normalized view over a directive.

    Iterating yields the directive's clauses lazily. Every call to
    ``iter()`` starts over, so the sequence can be consumed any number of
    times. A non-empty directive always yields at least one clause.
    """

    def __init__(self, directive: str):
        self.directive = directive
        self.normalized = " ".join(directive.lower().split())

    def __iter__(self) -> Iterator[str]:
        produced = False
        for fragment in CLAUSE_SEPARATOR.split(self.normalized):
            clause = fragment.strip(" -:'\"")
            if clause:
                produced = True
                yield clause
        if not produced and self.normalized:
            yield self.normalized

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def first(self) -> str:
        return next(iter(self), "")

    def tokens(self) -> List[str]:
        return tokenize(self.normalized)

    @property
    def word_count(self) -> int:
        return len(self.tokens())

    def specificity(self) -> float:
        """How detailed the directive is, in [0, 1].

        Half from clause count (saturating at 4), half from word count
        (saturating at 20).
        """

        clause_part = min(len(self), SPECIFICITY_CLAUSES) / SPECIFICITY_CLAUSES
        word_part = min(self.word_count, SPECIFICITY_WORDS) / SPECIFICITY_WORDS
        return 0.5 * clause_part + 0.5 * word_part

    def stems(self) -> Set[str]:
        """Stems of every word across all clauses"""
        return {stem(token) for clause in self for token in tokenize(clause)}

    def keywords(self) -> List[str]:
        """Content-bearing words in order of first appearance"""

        seen: List[str] = []
        for token in self.tokens():
            if len(token) < MIN_KEYWORD_LENGTH or token in STOPWORDS:
                continue
            if token not in seen:
                seen.append(token)
        return seen


def normalize_directive(directive: str) -> DirectiveClauses:
    """Clean and split a directive into clauses"""
    return DirectiveClauses(directive)
