"""Vocabulary and tag registry: raw occurrence counts gathered during training."""

from collections import Counter

SENTENCE_START = "SENTENCE_START"
SENTENCE_END = "SENTENCE_END"

SENTINEL_TAGS: frozenset[str] = frozenset({SENTENCE_START, SENTENCE_END})


class CountRegistry:
    """Accumulates tag, word, emission and transition counts.

    Tags are remembered in first-seen order. That order is the enumeration
    order used by the model and the decoder, so it must not be re-sorted.
    Counts for unseen keys read as zero.
    """

    def __init__(self) -> None:
        self._tags: dict[str, None] = {}
        self.tag_counts: Counter[str] = Counter()
        self.word_counts: Counter[str] = Counter()
        self.emission_counts: Counter[tuple[str, str]] = Counter()
        self.transition_counts: Counter[tuple[str, str]] = Counter()
        self._surface_forms: dict[str, str] = {}

    @property
    def tags(self) -> tuple[str, ...]:
        """All registered tags, sentinels included, in first-seen order."""
        return tuple(self._tags)

    def surface_form(self, word: str) -> str:
        """First surface spelling observed for a vocabulary key."""
        return self._surface_forms.get(word, word)

    def observe(self, word: str, tag: str, surface: str | None = None) -> None:
        """Count one occurrence of ``word`` labeled with ``tag``.

        Args:
            word: Vocabulary key (already case-normalized).
            tag: Tag label.
            surface: Original spelling, if different from ``word``.
        """
        self._register(tag)
        self.tag_counts[tag] += 1
        self.word_counts[word] += 1
        self.emission_counts[(word, tag)] += 1
        self._surface_forms.setdefault(word, surface if surface is not None else word)

    def observe_tag(self, tag: str) -> None:
        """Count an occurrence of a tag without a word (sentence sentinels)."""
        self._register(tag)
        self.tag_counts[tag] += 1

    def observe_transition(self, source_tag: str, target_tag: str) -> None:
        """Count one transition from ``source_tag`` to ``target_tag``."""
        self._register(source_tag)
        self._register(target_tag)
        self.transition_counts[(source_tag, target_tag)] += 1

    def _register(self, tag: str) -> None:
        if tag not in self._tags:
            self._tags[tag] = None
