"""Token and sentence value types shared by training, decoding and I/O."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TaggedToken:
    """A word paired with its part-of-speech tag.

    ``chunk`` holds an optional third-column label such as a BIO noun-group
    tag. It is carried through reading and writing but not used by the HMM.
    """

    word: str
    tag: str
    chunk: str | None = None


@dataclass(frozen=True, slots=True)
class TaggedSentence:
    """Result of tagging one sentence.

    Attributes:
        tokens: One TaggedToken per input word, in sentence order.
        log_probability: Log-probability of the best path, including the
            transitions out of SENTENCE_START and into SENTENCE_END.
            0.0 for an empty sentence.
    """

    tokens: tuple[TaggedToken, ...]
    log_probability: float

    @property
    def words(self) -> tuple[str, ...]:
        return tuple(token.word for token in self.tokens)

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(token.tag for token in self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)
