"""CRF baseline tagger over token features.

Uses python-crfsuite to train and apply a linear-chain CRF on the features
from hmmtag.pipeline.features, so HMM output can be compared with a
discriminative tagger trained on the same labeled data.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pycrfsuite

from hmmtag.exceptions import EmptyCorpusError
from hmmtag.pipeline.features import sentence_features
from hmmtag.pipeline.tokens import TaggedToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CRFTaggedSentence:
    """Result of CRF tagging.

    Attributes:
        tokens: One TaggedToken per input word.
        confidences: Marginal probability of each predicted tag.
        sequence_probability: Probability of the entire predicted tag sequence.
    """

    tokens: tuple[TaggedToken, ...]
    confidences: tuple[float, ...]
    sequence_probability: float

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(token.tag for token in self.tokens)


class CRFTagger:
    """Applies a trained CRF model to sentences."""

    def __init__(self, model_path: Path | str | None = None) -> None:
        """Initialize the CRF tagger.

        Args:
            model_path: Path to a trained CRF model file.
                If None, the tagger must be loaded later with load_model().
        """
        self._tagger: pycrfsuite.Tagger | None = None
        self._model_path: Path | None = None

        if model_path is not None:
            self.load_model(model_path)

    def load_model(self, model_path: Path | str) -> None:
        """Open a model written by CRFTrainer.train for part-of-speech tagging.

        A model that fails to open leaves any previously loaded model in place.

        Raises:
            FileNotFoundError: If there is no model at ``model_path``.
            RuntimeError: If the file is not a readable crfsuite model.
        """
        path = Path(model_path)
        if not path.is_file():
            raise FileNotFoundError(f"CRF model not found: {path}")

        tagger = pycrfsuite.Tagger()
        try:
            tagger.open(str(path))
        except (OSError, ValueError) as exc:
            raise RuntimeError(f"{path} is not a CRF tagging model: {exc}") from exc

        self._tagger = tagger
        self._model_path = path
        logger.info("Loaded CRF model with %d tags from %s", len(tagger.labels()), path)

    @property
    def is_loaded(self) -> bool:
        """True once a model is open and tag() can be called."""
        return self._tagger is not None

    @property
    def model_path(self) -> Path | None:
        """File the current model was loaded from."""
        return self._model_path

    @property
    def labels(self) -> tuple[str, ...]:
        """Tags known by the loaded model."""
        if self._tagger is None:
            return ()
        return tuple(self._tagger.labels())

    def tag(self, words: Sequence[str]) -> CRFTaggedSentence:
        """Predict a tag for every word.

        Raises:
            RuntimeError: If no model is loaded.
        """
        if self._tagger is None:
            raise RuntimeError("No CRF model loaded. Call load_model() first.")

        if not words:
            return CRFTaggedSentence(tokens=(), confidences=(), sequence_probability=1.0)

        self._tagger.set(sentence_features(words))
        predicted = self._tagger.tag()
        sequence_prob = self._tagger.probability(predicted)
        confidences = tuple(self._tagger.marginal(tag, idx) for idx, tag in enumerate(predicted))

        return CRFTaggedSentence(
            tokens=tuple(TaggedToken(word=word, tag=tag) for word, tag in zip(words, predicted, strict=True)),
            confidences=confidences,
            sequence_probability=sequence_prob,
        )

    def decode(self, words: Sequence[str]) -> tuple[str, ...]:
        return self.tag(words).tags


class CRFTrainer:
    """Trainer for CRF tagging models.

    Wraps python-crfsuite's Trainer with a sentence-level interface.
    """

    def __init__(
        self,
        algorithm: str = "lbfgs",
        c1: float = 0.1,
        c2: float = 0.1,
        max_iterations: int = 100,
        all_possible_transitions: bool = True,
    ) -> None:
        """Initialize the CRF trainer.

        Args:
            algorithm: Training algorithm. Options: 'lbfgs', 'l2sgd', 'ap', 'pa', 'arow'.
            c1: L1 regularization coefficient (lbfgs only).
            c2: L2 regularization coefficient.
            max_iterations: Maximum number of training iterations.
            all_possible_transitions: Include transitions not in training data.
        """
        self._trainer = pycrfsuite.Trainer(verbose=False)
        self._trainer.select(algorithm)
        params: dict[str, float | int | bool] = {
            "max_iterations": max_iterations,
            "feature.possible_transitions": all_possible_transitions,
        }
        # Only lbfgs takes c1; only lbfgs and l2sgd take c2
        if algorithm == "lbfgs":
            params["c1"] = c1
        if algorithm in ("lbfgs", "l2sgd"):
            params["c2"] = c2
        self._trainer.set_params(params)
        self._sentence_count = 0

    @property
    def sentence_count(self) -> int:
        return self._sentence_count

    def add_sentence(self, tokens: Sequence[TaggedToken]) -> None:
        """Add a labeled training sentence. Empty sentences are ignored."""
        if not tokens:
            return
        words = [token.word for token in tokens]
        self._trainer.append(sentence_features(words), [token.tag for token in tokens])
        self._sentence_count += 1

    def train(self, output_path: Path | str) -> None:
        """Train the model and save to file.

        Raises:
            EmptyCorpusError: If no sentences were added.
        """
        if self._sentence_count == 0:
            raise EmptyCorpusError(message="No training sentences were added")

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        logger.info("Training CRF model on %d sentences...", self._sentence_count)
        self._trainer.train(str(path))
        logger.info("Saved CRF model to %s", path)

    def get_params(self) -> dict[str, Any]:
        """Get current training parameters."""
        return dict(self._trainer.get_params())
