"""Pipeline components for HMM part-of-speech tagging."""

from hmmtag.pipeline.crf import CRFTaggedSentence, CRFTagger, CRFTrainer
from hmmtag.pipeline.estimator import EmissionTable, Estimator, HMMModel, TransitionTable, train
from hmmtag.pipeline.features import format_feature_lines, sentence_features, token_features
from hmmtag.pipeline.registry import SENTENCE_END, SENTENCE_START, CountRegistry
from hmmtag.pipeline.signature import WordShape, WordSignature, classify
from hmmtag.pipeline.tokens import TaggedSentence, TaggedToken
from hmmtag.pipeline.viterbi import ViterbiDecoder

__all__ = [
    "classify",
    "CountRegistry",
    "CRFTaggedSentence",
    "CRFTagger",
    "CRFTrainer",
    "EmissionTable",
    "Estimator",
    "format_feature_lines",
    "HMMModel",
    "SENTENCE_END",
    "SENTENCE_START",
    "sentence_features",
    "TaggedSentence",
    "TaggedToken",
    "token_features",
    "train",
    "TransitionTable",
    "ViterbiDecoder",
    "WordShape",
    "WordSignature",
]
