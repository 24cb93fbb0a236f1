"""Tagging accuracy metrics against gold-labeled sentences."""

from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from hmmtag.pipeline.tokens import TaggedToken


@dataclass
class TagMetrics:
    """Per-tag counts of a tagging run."""

    true_positives: int = 0
    false_positives: int = 0
    false_negatives: int = 0

    @property
    def precision(self) -> float:
        if self.true_positives + self.false_positives == 0:
            return 0.0
        return self.true_positives / (self.true_positives + self.false_positives)

    @property
    def recall(self) -> float:
        if self.true_positives + self.false_negatives == 0:
            return 0.0
        return self.true_positives / (self.true_positives + self.false_negatives)

    @property
    def f1(self) -> float:
        if self.precision + self.recall == 0:
            return 0.0
        return 2 * self.precision * self.recall / (self.precision + self.recall)


@dataclass
class EvaluationResults:
    """Aggregated token-level results."""

    total: int = 0
    correct: int = 0
    unknown_total: int = 0
    unknown_correct: int = 0
    sentences: int = 0
    exact_sentences: int = 0
    tag_metrics: dict[str, TagMetrics] = field(default_factory=dict)
    confusions: Counter[tuple[str, str]] = field(default_factory=Counter)

    @property
    def accuracy(self) -> float:
        return self.correct / self.total if self.total > 0 else 0.0

    @property
    def unknown_accuracy(self) -> float:
        return self.unknown_correct / self.unknown_total if self.unknown_total > 0 else 0.0

    @property
    def sentence_accuracy(self) -> float:
        return self.exact_sentences / self.sentences if self.sentences > 0 else 0.0

    def _metrics(self, tag: str) -> TagMetrics:
        if tag not in self.tag_metrics:
            self.tag_metrics[tag] = TagMetrics()
        return self.tag_metrics[tag]

    def add_sentence(
        self,
        gold: Sequence[TaggedToken],
        predicted: Sequence[str],
        is_unknown: Callable[[str], bool] | None = None,
    ) -> None:
        """Score one sentence.

        Raises:
            ValueError: If the lengths differ.
        """
        if len(gold) != len(predicted):
            raise ValueError(f"Predicted {len(predicted)} tags for a sentence of {len(gold)} words")

        self.sentences += 1
        all_correct = True
        for token, predicted_tag in zip(gold, predicted):
            self.total += 1
            hit = token.tag == predicted_tag
            unknown = is_unknown is not None and is_unknown(token.word)
            if unknown:
                self.unknown_total += 1
            if hit:
                self.correct += 1
                self._metrics(token.tag).true_positives += 1
                if unknown:
                    self.unknown_correct += 1
            else:
                all_correct = False
                self._metrics(token.tag).false_negatives += 1
                self._metrics(predicted_tag).false_positives += 1
                self.confusions[(token.tag, predicted_tag)] += 1
        if all_correct:
            self.exact_sentences += 1


def evaluate(
    gold_sentences: Iterable[Sequence[TaggedToken]],
    decode: Callable[[Sequence[str]], Sequence[str]],
    is_unknown: Callable[[str], bool] | None = None,
) -> EvaluationResults:
    """Tag every gold sentence with ``decode`` and compare against the gold tags."""
    results = EvaluationResults()
    for gold in gold_sentences:
        words = [token.word for token in gold]
        results.add_sentence(gold, decode(words), is_unknown)
    return results


def format_report(results: EvaluationResults, top_confusions: int = 10) -> str:
    """Human-readable summary of evaluation results."""
    lines = [
        f"Tokens: {results.total}",
        f"Accuracy: {results.accuracy:.2%} ({results.correct}/{results.total})",
        f"Sentence accuracy: {results.sentence_accuracy:.2%} ({results.exact_sentences}/{results.sentences})",
    ]
    if results.unknown_total:
        lines.append(
            f"Unknown-word accuracy: {results.unknown_accuracy:.2%} "
            f"({results.unknown_correct}/{results.unknown_total})"
        )

    lines.append("")
    lines.append(f"{'Tag':<10} {'Prec':>7} {'Rec':>7} {'F1':>7}")
    for tag in sorted(results.tag_metrics):
        metrics = results.tag_metrics[tag]
        lines.append(f"{tag:<10} {metrics.precision:>7.3f} {metrics.recall:>7.3f} {metrics.f1:>7.3f}")

    if results.confusions:
        lines.append("")
        lines.append("Most frequent confusions (gold -> predicted):")
        for (gold, predicted), count in results.confusions.most_common(top_confusions):
            lines.append(f"  {gold} -> {predicted}: {count}")

    return "\n".join(lines)
