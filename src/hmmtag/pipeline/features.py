"""Per-token features for discriminative taggers.

Each token gets string features built from its own spelling (shape flags,
suffix, length, first-letter case) and from its neighbours, with BOS/EOS
markers at the sentence edges. When part-of-speech tags are known they become
``pos=`` features too, which is how a chunker is trained on top of a tagger's
output. The features feed the CRF baseline and can be dumped as tab-delimited
lines for an external tagger.
"""

from collections.abc import Iterable, Iterator, Sequence

from hmmtag.pipeline.signature import classify

# Features copied from the neighbouring tokens
_CONTEXT_FEATURES = ("word", "shape", "suffix", "pos")


def token_features(word: str, tag: str | None = None) -> list[str]:
    """Features describing a single word in isolation.

    Args:
        word: Surface form of the token.
        tag: Part-of-speech tag of the token, added as ``pos=<tag>`` when given.
    """
    signature = classify(word)
    shape = signature.shape
    features = [
        f"word={word.lower()}",
        f"shape={shape.bits}",
        f"suffix={signature.suffix}",
        f"length={len(word)}",
        f"first_upper={bool(word) and word[0].isupper()}",
    ]
    if tag is not None:
        features.append(f"pos={tag}")
    if shape.has_upper:
        features.append("Upper")
    if shape.has_lower_after_first:
        features.append("Lower")
    if shape.has_hyphen:
        features.append("Hyphenated")
    if shape.has_digit:
        features.append("Numeral")
    return features


def sentence_features(words: Sequence[str], tags: Sequence[str] | None = None) -> list[list[str]]:
    """Features for every token of a sentence, including neighbour context."""
    if tags is not None and len(tags) != len(words):
        raise ValueError(f"Number of tags ({len(tags)}) doesn't match number of words ({len(words)})")

    base = [token_features(word, tags[idx] if tags is not None else None) for idx, word in enumerate(words)]
    results: list[list[str]] = []

    for idx, own in enumerate(base):
        features = list(own)
        if idx == 0:
            features.append("BOS")
        else:
            features.extend(
                f"prev:{feature}" for feature in base[idx - 1] if feature.split("=", 1)[0] in _CONTEXT_FEATURES
            )
        if idx == len(base) - 1:
            features.append("EOS")
        else:
            features.extend(
                f"next:{feature}" for feature in base[idx + 1] if feature.split("=", 1)[0] in _CONTEXT_FEATURES
            )
        results.append(features)

    return results


def format_feature_lines(
    sentences: Iterable[Sequence[str]],
    labels: Iterable[Sequence[str] | None] | None = None,
    tags: Iterable[Sequence[str] | None] | None = None,
) -> Iterator[str]:
    """Render features as ``word<TAB>feature...[<TAB>label]`` lines.

    A blank line follows each sentence. When ``labels`` is given, the gold
    label is appended as the last column (training format); otherwise the
    label column is omitted (test format). When ``tags`` is given, each
    token's part-of-speech tag is included as a ``pos=`` feature.
    """
    sentence_list = list(sentences)
    label_list = _per_sentence(labels, len(sentence_list), "label")
    tag_list = _per_sentence(tags, len(sentence_list), "tag")

    for words, sentence_labels, sentence_tags in zip(sentence_list, label_list, tag_list):
        if sentence_labels is not None and len(sentence_labels) != len(words):
            raise ValueError(
                f"Number of labels ({len(sentence_labels)}) doesn't match number of words ({len(words)})"
            )

        for idx, (word, features) in enumerate(zip(words, sentence_features(words, sentence_tags), strict=True)):
            columns = [word, *features]
            if sentence_labels is not None:
                columns.append(sentence_labels[idx])
            yield "\t".join(columns)
        yield ""


def _per_sentence(
    values: Iterable[Sequence[str] | None] | None, count: int, name: str
) -> list[Sequence[str] | None]:
    if values is None:
        return [None] * count
    value_list = list(values)
    if len(value_list) != count:
        raise ValueError(
            f"Number of {name} sequences ({len(value_list)}) doesn't match number of sentences ({count})"
        )
    return value_list
