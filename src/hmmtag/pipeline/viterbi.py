"""Viterbi decoding of the most probable tag sequence under an HMMModel.

The lattice is a (sentence length) x (state count) score table with a
matching table of backpointers. Both are indexed by integer positions into
the model's fixed state order, and ties keep the first maximizer in that
order.
"""

import logging
import math
from collections.abc import Callable, Sequence

from hmmtag.pipeline.estimator import HMMModel
from hmmtag.pipeline.registry import SENTENCE_END, SENTENCE_START
from hmmtag.pipeline.signature import WordSignature, classify
from hmmtag.pipeline.tokens import TaggedSentence, TaggedToken

logger = logging.getLogger(__name__)


def _log(probability: float) -> float:
    return math.log(probability) if probability > 0.0 else -math.inf


class ViterbiDecoder:
    """Finds the maximum-likelihood tag sequence for a sentence.

    The decoder only reads the model, so one instance can be shared by any
    number of threads; every call builds its own lattice.

    Example:
        decoder = ViterbiDecoder(model)
        decoder.decode(["The", "dog", "barks"])  # ("DT", "NN", "VBZ")
    """

    def __init__(
        self,
        model: HMMModel,
        classifier: Callable[[str], WordSignature] = classify,
    ) -> None:
        """Initialize the decoder.

        Args:
            model: Trained model.
            classifier: Maps out-of-vocabulary words to unknown-word signatures.
        """
        self._model = model
        self._classifier = classifier
        self._states = model.states
        self._log_space = model.config.log_space

        transform = _log if self._log_space else float
        transitions = model.transitions
        self._start = tuple(transform(transitions.probability(SENTENCE_START, tag)) for tag in self._states)
        self._end = tuple(transform(transitions.probability(tag, SENTENCE_END)) for tag in self._states)
        self._matrix = tuple(
            tuple(transform(transitions.probability(source, target)) for target in self._states)
            for source in self._states
        )

    @property
    def model(self) -> HMMModel:
        return self._model

    @property
    def states(self) -> tuple[str, ...]:
        return self._states

    def emission_row(self, word: str) -> tuple[float, ...]:
        """Emission probabilities of ``word`` under every state.

        Out-of-vocabulary words use their unknown-word bucket. If the bucket
        was never seen either, every state gets the configured
        unknown_probability so no path drops to zero.
        """
        model = self._model
        key = model.config.normalize_word(word)
        if key not in model.emissions:
            key = str(self._classifier(word))
            if key not in model.emissions:
                logger.debug("No unknown-word bucket for %r (%s)", word, key)
                return (model.config.unknown_probability,) * len(self._states)

        return tuple(model.emissions.probability(key, tag) or 0.0 for tag in self._states)

    def decode(self, words: Sequence[str]) -> tuple[str, ...]:
        """Return the most probable tag for each word."""
        return self.tag(words).tags

    def tag(self, words: Sequence[str]) -> TaggedSentence:
        """Tag a sentence.

        Args:
            words: The words of one sentence.

        Returns:
            TaggedSentence with one token per word. An empty sentence yields
            an empty result.

        Raises:
            RuntimeError: If the model has no decodable tags.
        """
        if not words:
            return TaggedSentence(tokens=(), log_probability=0.0)
        if not self._states:
            raise RuntimeError("Model has no tags to decode with")

        best_path, score = self._viterbi(words)
        tokens = tuple(
            TaggedToken(word=word, tag=self._states[idx]) for word, idx in zip(words, best_path, strict=True)
        )
        log_probability = score if self._log_space else _log(score)
        return TaggedSentence(tokens=tokens, log_probability=log_probability)

    def _combine(self, left: float, right: float) -> float:
        return left + right if self._log_space else left * right

    def _viterbi(self, words: Sequence[str]) -> tuple[list[int], float]:
        transform = _log if self._log_space else float
        combine = self._combine
        state_count = len(self._states)
        length = len(words)

        emissions = [tuple(transform(p) for p in self.emission_row(word)) for word in words]

        scores = [[0.0] * state_count for _ in range(length)]
        backpointers = [[0] * state_count for _ in range(length)]

        first_emissions = emissions[0]
        for state in range(state_count):
            scores[0][state] = combine(self._start[state], first_emissions[state])

        for position in range(1, length):
            previous_scores = scores[position - 1]
            current_scores = scores[position]
            current_backpointers = backpointers[position]
            word_emissions = emissions[position]

            for state in range(state_count):
                emission = word_emissions[state]
                best_previous = 0
                best_score = combine(combine(previous_scores[0], self._matrix[0][state]), emission)
                for previous in range(1, state_count):
                    candidate = combine(combine(previous_scores[previous], self._matrix[previous][state]), emission)
                    if candidate > best_score:
                        best_score = candidate
                        best_previous = previous
                current_scores[state] = best_score
                current_backpointers[state] = best_previous

        last_scores = scores[length - 1]
        best_last = 0
        best_total = combine(last_scores[0], self._end[0])
        for state in range(1, state_count):
            total = combine(last_scores[state], self._end[state])
            if total > best_total:
                best_total = total
                best_last = state

        path = [best_last]
        for position in range(length - 1, 0, -1):
            path.append(backpointers[position][path[-1]])
        path.reverse()
        return path, best_total
