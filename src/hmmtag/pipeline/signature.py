"""Unknown-word classification by word shape and suffix.

Rare training words and out-of-vocabulary words at decode time are mapped to
a signature such as ``Unknown_Word[1100,ing]``:
- four shape flags (upper-case letter, lower-case letter after the first
  character, digit, hyphen) rendered as 0/1
- the longest matching entry of a fixed English suffix lexicon
"""

from dataclasses import dataclass

UNKNOWN_WORD_PREFIX = "Unknown_Word"

# English derivational and inflectional suffixes, matched case-insensitively
SUFFIXES: frozenset[str] = frozenset(
    {
        # Nominal
        "ation",
        "ations",
        "ition",
        "tion",
        "sion",
        "ment",
        "ments",
        "ness",
        "ship",
        "hood",
        "ance",
        "ence",
        "ancy",
        "ency",
        "ism",
        "ist",
        "ists",
        "ity",
        "ities",
        "ian",
        "er",
        "ers",
        "or",
        "ors",
        "ee",
        "age",
        "dom",
        # Adjectival
        "able",
        "ible",
        "ical",
        "ful",
        "less",
        "ous",
        "ious",
        "eous",
        "ive",
        "ish",
        "ic",
        "al",
        "ary",
        "ory",
        "ant",
        "ent",
        "est",
        # Verbal
        "ize",
        "ise",
        "ify",
        "ate",
        "en",
        # Adverbial
        "ly",
        "ward",
        "wards",
        "wise",
        # Inflectional
        "ing",
        "ings",
        "ed",
        "ies",
        "es",
        "s",
        "'s",
    }
)

_MAX_SUFFIX_LENGTH = max(len(suffix) for suffix in SUFFIXES)


@dataclass(frozen=True, slots=True)
class WordShape:
    """Orthographic features of a word.

    Attributes:
        has_upper: Any character is upper-case.
        has_lower_after_first: Any character after the first is lower-case.
        has_digit: Any character is a digit.
        has_hyphen: Any character is a hyphen.
    """

    has_upper: bool = False
    has_lower_after_first: bool = False
    has_digit: bool = False
    has_hyphen: bool = False

    @property
    def bits(self) -> str:
        """Flags rendered as a four-character 0/1 string."""
        return "".join(
            "1" if flag else "0"
            for flag in (self.has_upper, self.has_lower_after_first, self.has_digit, self.has_hyphen)
        )


@dataclass(frozen=True, slots=True)
class WordSignature:
    """Unknown-word bucket key: word shape plus matched suffix ("" if none)."""

    shape: WordShape
    suffix: str

    def __str__(self) -> str:
        return f"{UNKNOWN_WORD_PREFIX}[{self.shape.bits},{self.suffix}]"


def word_shape(word: str) -> WordShape:
    """Compute the shape flags of a word in a single pass."""
    has_upper = False
    has_lower_after_first = False
    has_digit = False
    has_hyphen = False

    for idx, char in enumerate(word):
        if char.isupper():
            has_upper = True
        elif idx > 0 and char.islower():
            has_lower_after_first = True
        if char.isdigit():
            has_digit = True
        elif char == "-":
            has_hyphen = True

    return WordShape(
        has_upper=has_upper,
        has_lower_after_first=has_lower_after_first,
        has_digit=has_digit,
        has_hyphen=has_hyphen,
    )


def longest_suffix(word: str) -> str:
    """Find the longest lexicon suffix of a word.

    Lengths are tried from the longest lexicon entry down to 1, so the first
    match is the longest one.

    Returns:
        The matched suffix in lower case, or "" if none matched.
    """
    lowered = word.lower()
    for length in range(min(_MAX_SUFFIX_LENGTH, len(lowered)), 0, -1):
        candidate = lowered[-length:]
        if candidate in SUFFIXES:
            return candidate
    return ""


def classify(word: str) -> WordSignature:
    """Map a surface word to its unknown-word signature."""
    return WordSignature(shape=word_shape(word), suffix=longest_suffix(word))


def is_unknown_word_bucket(key: str) -> bool:
    """Check whether a vocabulary key is an unknown-word bucket."""
    return key.startswith(f"{UNKNOWN_WORD_PREFIX}[") and key.endswith("]")
