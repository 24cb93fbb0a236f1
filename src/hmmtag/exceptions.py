"""Exceptions for hmmtag part-of-speech tagging."""

from dataclasses import dataclass
from pathlib import Path


class TaggerError(Exception):
    """Base exception for all tagging errors."""

    pass


@dataclass
class MalformedRecordError(TaggerError):
    """A training or input line does not split into the required fields.

    Attributes:
        message: Description of the error.
        line_number: 1-based line number of the offending record.
        line: The raw line text.
    """

    message: str
    line_number: int
    line: str

    def __str__(self) -> str:
        return f"{self.message} (line {self.line_number}: {self.line!r})"


@dataclass
class InputFileError(TaggerError):
    """An input file is missing or unreadable."""

    message: str
    path: Path

    def __str__(self) -> str:
        return f"{self.message}: \"{self.path}\""


@dataclass
class ConfigError(TaggerError):
    """Configuration values are invalid."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ModelFrozenError(TaggerError):
    """Training data was added after the model was built."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class EmptyCorpusError(TaggerError):
    """No training sentences were observed before building a model."""

    message: str

    def __str__(self) -> str:
        return self.message
