"""hmmtag - Hidden Markov Model part-of-speech tagging with Viterbi decoding."""

from hmmtag.config import TaggerConfig, load_config
from hmmtag.corpus import (
    format_tagged,
    parse_labeled_lines,
    parse_unlabeled_lines,
    read_labeled_file,
    read_unlabeled_file,
    write_tagged_file,
)
from hmmtag.exceptions import (
    ConfigError,
    EmptyCorpusError,
    InputFileError,
    MalformedRecordError,
    ModelFrozenError,
    TaggerError,
)
from hmmtag.pipeline import (
    SENTENCE_END,
    SENTENCE_START,
    CountRegistry,
    CRFTagger,
    CRFTrainer,
    Estimator,
    HMMModel,
    TaggedSentence,
    TaggedToken,
    ViterbiDecoder,
    WordShape,
    WordSignature,
    classify,
    train,
)
from hmmtag.tagger import HMMTagger

__version__ = "0.1.0"

__all__ = [
    "classify",
    "ConfigError",
    "CountRegistry",
    "CRFTagger",
    "CRFTrainer",
    "EmptyCorpusError",
    "Estimator",
    "format_tagged",
    "HMMModel",
    "HMMTagger",
    "InputFileError",
    "load_config",
    "MalformedRecordError",
    "ModelFrozenError",
    "parse_labeled_lines",
    "parse_unlabeled_lines",
    "read_labeled_file",
    "read_unlabeled_file",
    "SENTENCE_END",
    "SENTENCE_START",
    "TaggedSentence",
    "TaggedToken",
    "TaggerConfig",
    "TaggerError",
    "train",
    "ViterbiDecoder",
    "WordShape",
    "WordSignature",
    "write_tagged_file",
]
