"""Line-oriented corpus reading and writing.

Labeled data holds one ``word<TAB or spaces>tag`` record per line, with
blank lines between sentences. An optional third column (a chunk label such
as B-NP) is kept on the token; later columns are ignored. Unlabeled
data holds one word per line in the same layout. Tagged output is written in
the labeled format, so it can be read back as training data.
"""

import logging
import re
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import TextIO, TypeVar

from hmmtag.exceptions import InputFileError, MalformedRecordError
from hmmtag.pipeline.tokens import TaggedSentence, TaggedToken

logger = logging.getLogger(__name__)

_FIELD_SEPARATOR = re.compile(r"[\t ]+")

_T = TypeVar("_T")


def _split_fields(line: str) -> list[str]:
    stripped = line.strip()
    if not stripped:
        return []
    return _FIELD_SEPARATOR.split(stripped)


def parse_labeled_lines(lines: Iterable[str]) -> Iterator[list[TaggedToken]]:
    """Group labeled lines into sentences.

    Raises:
        MalformedRecordError: If a non-blank line has fewer than two fields.
    """
    sentence: list[TaggedToken] = []
    for line_number, line in enumerate(lines, 1):
        fields = _split_fields(line)
        if not fields:
            if sentence:
                yield sentence
                sentence = []
            continue

        if len(fields) < 2:
            raise MalformedRecordError(
                message="Expected a word and a tag",
                line_number=line_number,
                line=line.rstrip("\r\n"),
            )
        chunk = fields[2] if len(fields) > 2 else None
        sentence.append(TaggedToken(word=fields[0], tag=fields[1], chunk=chunk))

    if sentence:
        yield sentence


def parse_unlabeled_lines(lines: Iterable[str]) -> Iterator[list[str]]:
    """Group one-word-per-line input into sentences.

    Only the first field of each line is used, so labeled files can be
    tagged again as-is.
    """
    sentence: list[str] = []
    for line in lines:
        fields = _split_fields(line)
        if not fields:
            if sentence:
                yield sentence
                sentence = []
            continue
        sentence.append(fields[0])

    if sentence:
        yield sentence


def check_file(path: Path | str) -> Path:
    """Verify that an input file exists.

    Raises:
        InputFileError: If the path is missing or not a file.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise InputFileError(message="File does not exist", path=file_path)
    return file_path


def _open_input(file_path: Path) -> TextIO:
    try:
        return open(file_path, encoding="utf-8")
    except OSError as exc:
        raise InputFileError(message=f"Cannot open file ({exc.strerror})", path=file_path) from exc


def _read_all(file_path: Path, records: Iterator[_T]) -> list[_T]:
    try:
        return list(records)
    except UnicodeDecodeError as exc:
        raise InputFileError(
            message=f"File is not valid UTF-8 ({exc.reason} at byte {exc.start})", path=file_path
        ) from exc
    except OSError as exc:
        raise InputFileError(message=f"Cannot read file ({exc.strerror})", path=file_path) from exc


def read_labeled_file(path: Path | str) -> list[list[TaggedToken]]:
    """Read all labeled sentences from a file.

    Raises:
        InputFileError: If the file does not exist or cannot be read as UTF-8 text.
        MalformedRecordError: If a record is malformed.
    """
    file_path = check_file(path)
    with _open_input(file_path) as f:
        sentences = _read_all(file_path, parse_labeled_lines(f))
    logger.info("Read %d labeled sentences from %s", len(sentences), file_path)
    return sentences


def read_unlabeled_file(path: Path | str) -> list[list[str]]:
    """Read all unlabeled sentences from a file.

    Raises:
        InputFileError: If the file does not exist or cannot be read as UTF-8 text.
    """
    file_path = check_file(path)
    with _open_input(file_path) as f:
        sentences = _read_all(file_path, parse_unlabeled_lines(f))
    logger.info("Read %d sentences from %s", len(sentences), file_path)
    return sentences


def format_tagged(sentences: Iterable[TaggedSentence | Sequence[TaggedToken]]) -> Iterator[str]:
    """Render sentences as ``word<TAB>tag[<TAB>chunk]`` lines, each sentence followed by a blank line."""
    for sentence in sentences:
        tokens = sentence.tokens if isinstance(sentence, TaggedSentence) else sentence
        for token in tokens:
            if token.chunk is None:
                yield f"{token.word}\t{token.tag}"
            else:
                yield f"{token.word}\t{token.tag}\t{token.chunk}"
        yield ""


def write_tagged_file(path: Path | str, sentences: Iterable[TaggedSentence | Sequence[TaggedToken]]) -> int:
    """Write tagged sentences in the labeled format.

    Returns:
        Number of sentences written.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(file_path, "w", encoding="utf-8") as f:
        for line in format_tagged(sentences):
            f.write(line + "\n")
            if not line:
                count += 1
    logger.info("Wrote %d tagged sentences to %s", count, file_path)
    return count
