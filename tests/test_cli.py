"""Tests for the command line interface."""

import tempfile
from pathlib import Path

import pytest

from hmmtag.cli import main
from hmmtag.corpus import read_labeled_file

TRAINING_TEXT = "The\tDT\ndog\tNN\nbarks\tVBZ\n.\t.\n\nThe\tDT\ndog\tNN\nbarks\tVBZ\n.\t.\n\n"
WORDS_TEXT = "The\ndog\nbarks\n.\n\nThe\ndog\n"


def _write(directory: Path, name: str, text: str) -> Path:
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


class TestTagCommand:
    """hmmtag tag."""

    def test_tag_to_file(self) -> None:
        """Tagged output is written in the training format."""
        with tempfile.TemporaryDirectory() as tmpdir:
            directory = Path(tmpdir)
            train = _write(directory, "train.pos", TRAINING_TEXT)
            words = _write(directory, "test.words", WORDS_TEXT)
            output = directory / "out.pos"

            assert main(["tag", str(train), str(words), "-o", str(output)]) == 0

            sentences = read_labeled_file(output)
            assert [[token.tag for token in sentence] for sentence in sentences] == [
                ["DT", "NN", "VBZ", "."],
                ["DT", "NN"],
            ]

    def test_tag_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Without -o the output goes to stdout."""
        with tempfile.TemporaryDirectory() as tmpdir:
            directory = Path(tmpdir)
            train = _write(directory, "train.pos", TRAINING_TEXT)
            words = _write(directory, "test.words", "The\ndog\nbarks\n.\n")

            assert main(["tag", str(train), str(words), "--alpha", "0.5"]) == 0

        assert capsys.readouterr().out == "The\tDT\ndog\tNN\nbarks\tVBZ\n.\t.\n\n"

    def test_missing_file(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Missing inputs exit with status 1 and a diagnostic."""
        with tempfile.TemporaryDirectory() as tmpdir:
            words = _write(Path(tmpdir), "test.words", WORDS_TEXT)

            assert main(["tag", "/nonexistent/train.pos", str(words)]) == 1

        assert "File does not exist" in capsys.readouterr().err

    def test_malformed_training(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A malformed record aborts the run."""
        with tempfile.TemporaryDirectory() as tmpdir:
            directory = Path(tmpdir)
            train = _write(directory, "train.pos", "The\tDT\nbroken\n")
            words = _write(directory, "test.words", WORDS_TEXT)

            assert main(["tag", str(train), str(words)]) == 1

        assert "line 2" in capsys.readouterr().err

    def test_config_file(self) -> None:
        """Settings can come from a YAML file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            directory = Path(tmpdir)
            train = _write(directory, "train.pos", TRAINING_TEXT)
            words = _write(directory, "test.words", WORDS_TEXT)
            config = _write(directory, "tagger.yaml", "alpha: 0.1\nrare_threshold: 0\n")
            output = directory / "out.pos"

            assert main(["tag", str(train), str(words), "--config", str(config), "-o", str(output)]) == 0
            assert len(read_labeled_file(output)) == 2

    def test_invalid_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Invalid settings are reported, not raised."""
        with tempfile.TemporaryDirectory() as tmpdir:
            directory = Path(tmpdir)
            train = _write(directory, "train.pos", TRAINING_TEXT)
            words = _write(directory, "test.words", WORDS_TEXT)

            assert main(["tag", str(train), str(words), "--alpha", "-1"]) == 1

        assert "alpha" in capsys.readouterr().err

    def test_invalid_config_value_type(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A non-numeric alpha in the config file is reported, not raised."""
        with tempfile.TemporaryDirectory() as tmpdir:
            directory = Path(tmpdir)
            train = _write(directory, "train.pos", TRAINING_TEXT)
            words = _write(directory, "test.words", WORDS_TEXT)
            config = _write(directory, "tagger.yaml", "alpha: abc\n")

            assert main(["tag", str(train), str(words), "--config", str(config)]) == 1

        assert "alpha must be a number" in capsys.readouterr().err

    def test_undecodable_training_file(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Training data that is not UTF-8 is reported, not raised."""
        with tempfile.TemporaryDirectory() as tmpdir:
            directory = Path(tmpdir)
            train = directory / "train.pos"
            train.write_bytes(b"caf\xe9\tNN\n\n")
            words = _write(directory, "test.words", WORDS_TEXT)

            assert main(["tag", str(train), str(words)]) == 1

        err = capsys.readouterr().err
        assert "Error:" in err
        assert "UTF-8" in err


class TestOtherCommands:
    """evaluate, features and the CRF commands."""

    def test_evaluate(self, capsys: pytest.CaptureFixture[str]) -> None:
        """evaluate prints an accuracy report."""
        with tempfile.TemporaryDirectory() as tmpdir:
            directory = Path(tmpdir)
            train = _write(directory, "train.pos", TRAINING_TEXT)

            assert main(["evaluate", str(train), str(train)]) == 0

        assert "Accuracy: 100.00% (8/8)" in capsys.readouterr().out

    def test_features(self) -> None:
        """features writes one line per token plus sentence breaks."""
        with tempfile.TemporaryDirectory() as tmpdir:
            directory = Path(tmpdir)
            train = _write(directory, "train.pos", TRAINING_TEXT)
            output = directory / "features.txt"

            assert main(["features", str(train), str(output)]) == 0

            lines = output.read_text(encoding="utf-8").split("\n")
            assert lines[0].startswith("The\t")
            assert lines[0].endswith("\tDT")
            assert lines[4] == ""

    def test_features_unlabeled(self) -> None:
        """Unlabeled input produces features without a label column."""
        with tempfile.TemporaryDirectory() as tmpdir:
            directory = Path(tmpdir)
            words = _write(directory, "test.words", WORDS_TEXT)
            output = directory / "features.txt"

            assert main(["features", "--unlabeled", str(words), str(output)]) == 0

            first = output.read_text(encoding="utf-8").split("\n")[0]
            assert first.split("\t")[0] == "The"
            assert "BOS" in first.split("\t")

    def test_crf_train_and_tag(self) -> None:
        """The CRF baseline trains and tags from the command line."""
        with tempfile.TemporaryDirectory() as tmpdir:
            directory = Path(tmpdir)
            train = _write(directory, "train.pos", TRAINING_TEXT)
            words = _write(directory, "test.words", WORDS_TEXT)
            model = directory / "pos.crfsuite"
            output = directory / "out.pos"

            assert main(["crf-train", str(train), "-o", str(model), "--max-iter", "20"]) == 0
            assert model.exists()
            assert main(["crf-tag", str(model), str(words), "-o", str(output)]) == 0
            assert [len(sentence) for sentence in read_labeled_file(output)] == [4, 2]

    def test_crf_tag_missing_model(self) -> None:
        """A missing CRF model is reported."""
        with tempfile.TemporaryDirectory() as tmpdir:
            words = _write(Path(tmpdir), "test.words", WORDS_TEXT)

            assert main(["crf-tag", "/nonexistent/model.crfsuite", str(words)]) == 1

    def test_crf_tag_corrupt_model(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A file that is not a CRF model is reported with its path."""
        with tempfile.TemporaryDirectory() as tmpdir:
            directory = Path(tmpdir)
            words = _write(directory, "test.words", WORDS_TEXT)
            model = directory / "pos.crfsuite"
            model.write_bytes(b"garbage")

            assert main(["crf-tag", str(model), str(words)]) == 1

        err = capsys.readouterr().err
        assert "Could not load CRF model" in err
        assert "pos.crfsuite" in err

    def test_features_with_chunk_column(self) -> None:
        """A third column becomes the label and the tags become pos= features."""
        with tempfile.TemporaryDirectory() as tmpdir:
            directory = Path(tmpdir)
            train = _write(directory, "train.chunk", "The\tDT\tB-NP\ndog\tNN\tI-NP\nbarks\tVBZ\tO\n\n")
            output = directory / "features.txt"

            assert main(["features", str(train), str(output)]) == 0

            lines = output.read_text(encoding="utf-8").split("\n")
            first = lines[0].split("\t")
            second = lines[1].split("\t")
            assert first[0] == "The"
            assert first[-1] == "B-NP"
            assert "pos=DT" in first
            assert second[-1] == "I-NP"
            assert "prev:pos=DT" in second
            assert lines[2].split("\t")[-1] == "O"
            assert lines[3] == ""
