"""Command line interface.

Usage:
    hmmtag tag data/train.pos data/test.words -o out.pos
    hmmtag tag data/train.pos data/test.words --alpha 0.1 --rare-threshold 2
    hmmtag evaluate data/train.pos data/dev.pos
    hmmtag features data/train.pos features.txt
    hmmtag features data/train.chunk features.txt
    hmmtag crf-train data/train.pos -o models/pos.crfsuite
    hmmtag crf-tag models/pos.crfsuite data/test.words -o out.pos
"""

import argparse
import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path

from hmmtag.config import TaggerConfig, load_config
from hmmtag.corpus import check_file, format_tagged, read_labeled_file, read_unlabeled_file, write_tagged_file
from hmmtag.evaluation import evaluate, format_report
from hmmtag.exceptions import InputFileError, TaggerError
from hmmtag.pipeline.crf import CRFTagger, CRFTrainer
from hmmtag.pipeline.features import format_feature_lines
from hmmtag.pipeline.tokens import TaggedSentence, TaggedToken
from hmmtag.tagger import HMMTagger

logger = logging.getLogger(__name__)


def _add_model_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=Path, help="YAML file with tagger settings")
    parser.add_argument("--alpha", type=float, help="Additive smoothing constant (default: 1.0)")
    parser.add_argument(
        "--rare-threshold",
        type=int,
        help="Words seen this many times or fewer become unknown-word buckets (default: 1)",
    )
    parser.add_argument(
        "--unknown-probability",
        type=float,
        help="Emission probability for words with no known bucket (default: 0.001)",
    )
    parser.add_argument(
        "--keep-case",
        action="store_true",
        help="Do not upper-case words before vocabulary lookup",
    )
    parser.add_argument(
        "--linear",
        action="store_true",
        help="Multiply raw probabilities instead of summing log-probabilities",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hmmtag", description="HMM part-of-speech tagger")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    tag_parser = subparsers.add_parser("tag", help="Train on a labeled file and tag a words file")
    tag_parser.add_argument("training_data", type=Path, help="Labeled training file (word<TAB>tag)")
    tag_parser.add_argument("words", type=Path, help="Words to tag, one per line")
    tag_parser.add_argument("--output", "-o", type=Path, help="Output file (default: stdout)")
    _add_model_arguments(tag_parser)

    eval_parser = subparsers.add_parser("evaluate", help="Train on a labeled file and score a gold file")
    eval_parser.add_argument("training_data", type=Path, help="Labeled training file")
    eval_parser.add_argument("gold", type=Path, help="Labeled evaluation file")
    _add_model_arguments(eval_parser)

    feat_parser = subparsers.add_parser("features", help="Dump token features for an external tagger")
    feat_parser.add_argument(
        "input",
        type=Path,
        help="Labeled file (word, tag and optional chunk columns), or words file with --unlabeled",
    )
    feat_parser.add_argument("output", type=Path, help="Feature file to write")
    feat_parser.add_argument("--unlabeled", action="store_true", help="Input has no tag column")

    crf_train_parser = subparsers.add_parser("crf-train", help="Train the CRF baseline")
    crf_train_parser.add_argument("training_data", type=Path, help="Labeled training file")
    crf_train_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=Path("models/pos.crfsuite"),
        help="Output model path (default: models/pos.crfsuite)",
    )
    crf_train_parser.add_argument("--c1", type=float, default=0.1, help="L1 coefficient (default: 0.1)")
    crf_train_parser.add_argument("--c2", type=float, default=0.1, help="L2 coefficient (default: 0.1)")
    crf_train_parser.add_argument("--max-iter", type=int, default=100, help="Maximum iterations (default: 100)")
    crf_train_parser.add_argument(
        "--algorithm",
        choices=["lbfgs", "l2sgd", "ap", "pa", "arow"],
        default="lbfgs",
        help="Training algorithm (default: lbfgs)",
    )

    crf_tag_parser = subparsers.add_parser("crf-tag", help="Tag a words file with a CRF model")
    crf_tag_parser.add_argument("model", type=Path, help="Trained CRF model")
    crf_tag_parser.add_argument("words", type=Path, help="Words to tag, one per line")
    crf_tag_parser.add_argument("--output", "-o", type=Path, help="Output file (default: stdout)")

    return parser


def _config_from_args(args: argparse.Namespace) -> TaggerConfig:
    config = load_config(args.config) if args.config else TaggerConfig()
    return config.with_overrides(
        alpha=args.alpha,
        rare_threshold=args.rare_threshold,
        unknown_probability=args.unknown_probability,
        uppercase=False if args.keep_case else None,
        log_space=False if args.linear else None,
    )


def _emit(sentences: Iterable[TaggedSentence | Sequence[TaggedToken]], output: Path | None) -> None:
    if output is not None:
        write_tagged_file(output, sentences)
        return
    for line in format_tagged(sentences):
        print(line)


def _run_tag(args: argparse.Namespace) -> None:
    check_file(args.training_data)
    check_file(args.words)
    config = _config_from_args(args)

    tagger = HMMTagger.train(read_labeled_file(args.training_data), config)
    _emit(tagger.tag_sentences(read_unlabeled_file(args.words)), args.output)


def _run_evaluate(args: argparse.Namespace) -> None:
    check_file(args.training_data)
    check_file(args.gold)
    config = _config_from_args(args)

    tagger = HMMTagger.train(read_labeled_file(args.training_data), config)
    results = evaluate(read_labeled_file(args.gold), tagger.decode, lambda word: not tagger.is_known(word))
    print(format_report(results))


def _run_features(args: argparse.Namespace) -> None:
    words: Sequence[Sequence[str]]
    labels: Sequence[Sequence[str]] | None
    tags: Sequence[Sequence[str]] | None = None
    if args.unlabeled:
        words = read_unlabeled_file(args.input)
        labels = None
    else:
        sentences = read_labeled_file(args.input)
        words = [[token.word for token in sentence] for sentence in sentences]
        if sentences and all(token.chunk is not None for sentence in sentences for token in sentence):
            # Chunk column present: POS tags become features and chunks the label
            tags = [[token.tag for token in sentence] for sentence in sentences]
            labels = [[token.chunk or "" for token in sentence] for sentence in sentences]
        else:
            labels = [[token.tag for token in sentence] for sentence in sentences]

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with open(args.output, "w", encoding="utf-8") as f:
        for line in format_feature_lines(words, labels, tags):
            f.write(line + "\n")
    logger.info("Wrote features for %d sentences to %s", len(words), args.output)


def _run_crf_train(args: argparse.Namespace) -> None:
    sentences = read_labeled_file(args.training_data)
    trainer = CRFTrainer(
        algorithm=args.algorithm,
        c1=args.c1,
        c2=args.c2,
        max_iterations=args.max_iter,
    )
    for sentence in sentences:
        trainer.add_sentence(sentence)
    trainer.train(args.output)
    print(f"Model saved to {args.output}")


def _run_crf_tag(args: argparse.Namespace) -> None:
    check_file(args.model)
    sentences = read_unlabeled_file(args.words)
    try:
        tagger = CRFTagger(args.model)
    except RuntimeError as exc:
        raise InputFileError(message=f"Could not load CRF model ({exc})", path=args.model) from exc

    _emit((tagger.tag(words).tokens for words in sentences), args.output)


_COMMANDS = {
    "tag": _run_tag,
    "evaluate": _run_evaluate,
    "features": _run_features,
    "crf-train": _run_crf_train,
    "crf-tag": _run_crf_tag,
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        _COMMANDS[args.command](args)
    except TaggerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
