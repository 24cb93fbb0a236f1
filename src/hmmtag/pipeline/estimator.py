"""HMM model estimation with rare-word collapsing and additive smoothing.

Training is two-phase:
1. Raw counts are accumulated in a CountRegistry, one sentence at a time.
2. build() turns the counts into an immutable HMMModel: rare words are folded
   into their unknown-word buckets, then transition and emission counts are
   smoothed and normalized.
"""

import logging
import math
from collections import Counter
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from hmmtag.config import TaggerConfig
from hmmtag.exceptions import EmptyCorpusError, ModelFrozenError
from hmmtag.pipeline.registry import SENTENCE_END, SENTENCE_START, SENTINEL_TAGS, CountRegistry
from hmmtag.pipeline.signature import classify
from hmmtag.pipeline.tokens import TaggedToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransitionTable:
    """Smoothed P(target | source).

    Defined for every source tag except SENTENCE_END and every target tag
    except SENTENCE_START.
    """

    probabilities: Mapping[tuple[str, str], float]

    def probability(self, source_tag: str, target_tag: str) -> float:
        return self.probabilities.get((source_tag, target_tag), 0.0)

    def outgoing_mass(self, source_tag: str) -> float:
        """Total probability leaving ``source_tag`` over all defined targets."""
        return math.fsum(p for (source, _), p in self.probabilities.items() if source == source_tag)


@dataclass(frozen=True, slots=True)
class EmissionTable:
    """Smoothed P(word | tag).

    Observed pairs are stored explicitly. An in-vocabulary word never seen
    with a tag gets that tag's smoothing floor.

    Attributes:
        observed: Probabilities of (word, tag) pairs seen in training.
        floors: Per-tag probability of an in-vocabulary word never seen with it.
        vocabulary: Final vocabulary keys, unknown-word buckets included.
    """

    observed: Mapping[tuple[str, str], float]
    floors: Mapping[str, float]
    vocabulary: frozenset[str]

    def __contains__(self, word: object) -> bool:
        return word in self.vocabulary

    def probability(self, word: str, tag: str) -> float | None:
        """Emission probability, or None if ``word`` is not in the vocabulary."""
        if word not in self.vocabulary:
            return None
        observed = self.observed.get((word, tag))
        if observed is not None:
            return observed
        return self.floors.get(tag, 0.0)

    def tag_mass(self, tag: str) -> float:
        """Sum of P(word | tag) over the whole vocabulary."""
        return math.fsum(self.probability(word, tag) or 0.0 for word in self.vocabulary)


@dataclass(frozen=True, slots=True)
class HMMModel:
    """A trained, immutable HMM.

    Attributes:
        tags: All tags in enumeration order, sentinels included.
        tag_counts: Training occurrences of each tag.
        word_counts: Training occurrences of each vocabulary key.
        transitions: Smoothed transition table.
        emissions: Smoothed emission table.
        config: Configuration the model was built with.
    """

    tags: tuple[str, ...]
    tag_counts: Mapping[str, int]
    word_counts: Mapping[str, int]
    transitions: TransitionTable
    emissions: EmissionTable
    config: TaggerConfig

    @property
    def states(self) -> tuple[str, ...]:
        """Decodable tags: every tag except the sentence sentinels."""
        return tuple(tag for tag in self.tags if tag not in SENTINEL_TAGS)

    @property
    def vocabulary(self) -> frozenset[str]:
        return self.emissions.vocabulary

    def emission(self, word: str, tag: str) -> float | None:
        return self.emissions.probability(word, tag)

    def transition(self, source_tag: str, target_tag: str) -> float:
        return self.transitions.probability(source_tag, target_tag)


def collapse_rare_words(
    word_counts: Mapping[str, int],
    emission_counts: Mapping[tuple[str, str], int],
    threshold: int,
    signature_of: Callable[[str], str],
) -> tuple[Counter[str], Counter[tuple[str, str]]]:
    """Fold every word seen ``threshold`` times or fewer into its bucket.

    Returns new counters; the inputs are left untouched.

    Args:
        word_counts: Raw per-word counts.
        emission_counts: Raw (word, tag) counts.
        threshold: Rarity threshold. Words with count <= threshold collapse.
        signature_of: Maps a vocabulary key to its bucket key.

    Returns:
        (word_counts, emission_counts) over the collapsed vocabulary.
    """
    replacement: dict[str, str] = {}
    for word, count in word_counts.items():
        if count <= threshold:
            replacement[word] = signature_of(word)

    collapsed_words: Counter[str] = Counter()
    for word, count in word_counts.items():
        collapsed_words[replacement.get(word, word)] += count

    collapsed_emissions: Counter[tuple[str, str]] = Counter()
    for (word, tag), count in emission_counts.items():
        collapsed_emissions[(replacement.get(word, word), tag)] += count

    if replacement:
        logger.debug(
            "Collapsed %d rare words into %d unknown-word buckets",
            len(replacement),
            len(set(replacement.values())),
        )
    return collapsed_words, collapsed_emissions


def smooth_transitions(
    tags: tuple[str, ...],
    tag_counts: Mapping[str, int],
    transition_counts: Mapping[tuple[str, str], int],
    alpha: float,
) -> dict[tuple[str, str], float]:
    """(count + alpha) / (tagCount[source] + alpha * |tags|) for every defined pair."""
    sources = [tag for tag in tags if tag != SENTENCE_END]
    targets = [tag for tag in tags if tag != SENTENCE_START]
    smoothed_size = alpha * len(tags)

    probabilities: dict[tuple[str, str], float] = {}
    for source in sources:
        denominator = tag_counts.get(source, 0) + smoothed_size
        for target in targets:
            count = transition_counts.get((source, target), 0)
            probabilities[(source, target)] = (count + alpha) / denominator
    return probabilities


def smooth_emissions(
    states: tuple[str, ...],
    tag_counts: Mapping[str, int],
    emission_counts: Mapping[tuple[str, str], int],
    vocabulary_size: int,
    alpha: float,
) -> tuple[dict[tuple[str, str], float], dict[str, float]]:
    """(count + alpha) / (tagCount[tag] + alpha * |vocabulary|).

    Returns:
        (observed pair probabilities, per-tag floor for unobserved pairs).
    """
    smoothed_size = alpha * vocabulary_size
    denominators = {tag: tag_counts.get(tag, 0) + smoothed_size for tag in states}

    observed = {
        (word, tag): (count + alpha) / denominators[tag]
        for (word, tag), count in emission_counts.items()
        if tag in denominators
    }
    floors = {tag: alpha / denominator for tag, denominator in denominators.items()}
    return observed, floors


class Estimator:
    """Builds an HMMModel from labeled sentences.

    Example:
        estimator = Estimator(TaggerConfig(alpha=0.5))
        estimator.add_sentence([TaggedToken("The", "DT"), TaggedToken("dog", "NN")])
        model = estimator.build()

    After build() the estimator is frozen; start a new Estimator to train
    another model.
    """

    def __init__(self, config: TaggerConfig | None = None) -> None:
        self._config = config or TaggerConfig()
        self._registry = CountRegistry()
        self._sentence_count = 0
        self._model: HMMModel | None = None

    @property
    def config(self) -> TaggerConfig:
        return self._config

    @property
    def sentence_count(self) -> int:
        return self._sentence_count

    @property
    def is_frozen(self) -> bool:
        return self._model is not None

    def add_sentence(self, tokens: Iterable[TaggedToken | tuple[str, str]]) -> None:
        """Record one labeled sentence.

        Transitions SENTENCE_START -> first tag and last tag -> SENTENCE_END
        are recorded around the sentence. Empty sentences are ignored.

        Raises:
            ModelFrozenError: If build() was already called.
            ValueError: If a token uses a sentinel tag.
        """
        if self._model is not None:
            raise ModelFrozenError(message="Model already built; create a new Estimator to train again")

        pairs = [(token.word, token.tag) if isinstance(token, TaggedToken) else token for token in tokens]
        if not pairs:
            return

        for _, tag in pairs:
            if tag in SENTINEL_TAGS:
                raise ValueError(f"Tag {tag!r} is reserved for sentence boundaries")

        registry = self._registry
        registry.observe_tag(SENTENCE_START)
        previous = SENTENCE_START
        for word, tag in pairs:
            registry.observe(self._config.normalize_word(word), tag, surface=word)
            registry.observe_transition(previous, tag)
            previous = tag
        registry.observe_transition(previous, SENTENCE_END)
        registry.observe_tag(SENTENCE_END)
        self._sentence_count += 1

    def add_sentences(self, sentences: Iterable[Iterable[TaggedToken | tuple[str, str]]]) -> None:
        for sentence in sentences:
            self.add_sentence(sentence)

    def build(self) -> HMMModel:
        """Finalize the counts into an immutable model.

        Calling build() again returns the same model.

        Raises:
            EmptyCorpusError: If no non-empty sentence was added.
        """
        if self._model is not None:
            return self._model
        if self._sentence_count == 0:
            raise EmptyCorpusError(message="No training sentences were added")

        config = self._config
        registry = self._registry
        tags = registry.tags
        states = tuple(tag for tag in tags if tag not in SENTINEL_TAGS)

        word_counts, emission_counts = collapse_rare_words(
            registry.word_counts,
            registry.emission_counts,
            config.rare_threshold,
            lambda word: str(classify(registry.surface_form(word))),
        )

        transitions = smooth_transitions(tags, registry.tag_counts, registry.transition_counts, config.alpha)
        observed, floors = smooth_emissions(states, registry.tag_counts, emission_counts, len(word_counts), config.alpha)

        self._model = HMMModel(
            tags=tags,
            tag_counts=MappingProxyType(dict(registry.tag_counts)),
            word_counts=MappingProxyType(dict(word_counts)),
            transitions=TransitionTable(probabilities=MappingProxyType(transitions)),
            emissions=EmissionTable(
                observed=MappingProxyType(observed),
                floors=MappingProxyType(floors),
                vocabulary=frozenset(word_counts),
            ),
            config=config,
        )
        logger.info(
            "Built HMM from %d sentences: %d tags, %d vocabulary entries",
            self._sentence_count,
            len(states),
            len(word_counts),
        )
        return self._model


def train(
    sentences: Iterable[Iterable[TaggedToken | tuple[str, str]]],
    config: TaggerConfig | None = None,
) -> HMMModel:
    """Train a model from labeled sentences in one call."""
    estimator = Estimator(config)
    estimator.add_sentences(sentences)
    return estimator.build()
