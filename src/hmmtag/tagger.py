"""HMMTagger - main public interface for training and tagging.

Example:
    tagger = HMMTagger.train(read_labeled_file("train.pos"))
    tagger.tag(["The", "dog", "barks"]).tags  # ("DT", "NN", "VBZ")
"""

import logging
from collections.abc import Iterable, Iterator, Sequence

from hmmtag.config import TaggerConfig
from hmmtag.pipeline.estimator import Estimator, HMMModel
from hmmtag.pipeline.tokens import TaggedSentence, TaggedToken
from hmmtag.pipeline.viterbi import ViterbiDecoder

logger = logging.getLogger(__name__)


class HMMTagger:
    """Part-of-speech tagger backed by a trained HMM and a Viterbi decoder.

    Instances are read-only after construction and can be shared between
    threads.
    """

    def __init__(self, model: HMMModel) -> None:
        self._model = model
        self._decoder = ViterbiDecoder(model)

    @classmethod
    def train(
        cls,
        sentences: Iterable[Iterable[TaggedToken | tuple[str, str]]],
        config: TaggerConfig | None = None,
    ) -> "HMMTagger":
        """Train a tagger from labeled sentences.

        Raises:
            EmptyCorpusError: If there are no non-empty sentences.
        """
        estimator = Estimator(config)
        estimator.add_sentences(sentences)
        return cls(estimator.build())

    @property
    def model(self) -> HMMModel:
        return self._model

    @property
    def config(self) -> TaggerConfig:
        return self._model.config

    def is_known(self, word: str) -> bool:
        """Whether ``word`` has its own vocabulary entry (not an unknown-word bucket)."""
        return self._model.config.normalize_word(word) in self._model.vocabulary

    def tag(self, words: Sequence[str]) -> TaggedSentence:
        """Tag one sentence."""
        return self._decoder.tag(words)

    def decode(self, words: Sequence[str]) -> tuple[str, ...]:
        """Tags only, one per word."""
        return self._decoder.decode(words)

    def tag_sentences(self, sentences: Iterable[Sequence[str]]) -> Iterator[TaggedSentence]:
        """Tag sentences one at a time, in order."""
        count = 0
        for words in sentences:
            yield self._decoder.tag(words)
            count += 1
        logger.debug("Tagged %d sentences", count)
