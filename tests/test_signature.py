"""Tests for the unknown-word classifier."""

from hmmtag.pipeline.signature import (
    SUFFIXES,
    WordShape,
    WordSignature,
    classify,
    is_unknown_word_bucket,
    longest_suffix,
    word_shape,
)


class TestWordShape:
    """Shape flag extraction tests."""

    def test_all_caps(self) -> None:
        """All-caps word has upper flag only."""
        assert word_shape("DOG") == WordShape(has_upper=True)

    def test_capitalized(self) -> None:
        """Capitalized word has upper and lower-after-first flags."""
        shape = word_shape("Dog")

        assert shape.has_upper
        assert shape.has_lower_after_first
        assert not shape.has_digit
        assert not shape.has_hyphen

    def test_initial_lowercase_not_counted(self) -> None:
        """A lower-case first character alone does not set the lower flag."""
        assert word_shape("a") == WordShape()
        assert word_shape("aB").has_lower_after_first is False

    def test_lowercase_word(self) -> None:
        """Lower-case word sets lower flag from the second character."""
        assert word_shape("dog") == WordShape(has_lower_after_first=True)

    def test_digit_and_hyphen(self) -> None:
        """Digits and hyphens are detected anywhere."""
        shape = word_shape("1-2")

        assert shape.has_digit
        assert shape.has_hyphen
        assert not shape.has_upper

    def test_empty_word(self) -> None:
        """Empty word has no flags."""
        assert word_shape("") == WordShape()

    def test_bits_rendering(self) -> None:
        """Bits render in upper, lower, digit, hyphen order."""
        assert WordShape().bits == "0000"
        assert WordShape(has_upper=True, has_hyphen=True).bits == "1001"
        assert word_shape("Mid-90s").bits == "1111"


class TestLongestSuffix:
    """Suffix lexicon matching tests."""

    def test_longest_match_wins(self) -> None:
        """'ations' is preferred over 'ation', 's' and 'ons'."""
        assert longest_suffix("nations") == "ations"

    def test_ly_over_y(self) -> None:
        """Two-letter suffix beats one-letter suffix."""
        assert longest_suffix("quickly") == "ly"

    def test_case_insensitive(self) -> None:
        """Upper-case words match lower-case suffixes."""
        assert longest_suffix("RUNNING") == "ing"
        assert longest_suffix("BARKS") == "s"

    def test_no_match(self) -> None:
        """Words without a lexicon suffix return empty string."""
        assert longest_suffix("dog") == ""
        assert longest_suffix("") == ""

    def test_whole_word_can_match(self) -> None:
        """A word that equals a lexicon entry matches itself."""
        assert longest_suffix("s") == "s"

    def test_result_always_in_lexicon(self) -> None:
        """Every non-empty result is a lexicon entry."""
        for word in ("happiness", "walked", "biggest", "national", "children"):
            suffix = longest_suffix(word)
            assert suffix == "" or suffix in SUFFIXES


class TestClassify:
    """Signature tests."""

    def test_signature_string(self) -> None:
        """Signature renders as Unknown_Word[bits,suffix]."""
        assert str(classify("Running")) == "Unknown_Word[1100,ing]"
        assert str(classify("DOG")) == "Unknown_Word[1000,]"

    def test_deterministic(self) -> None:
        """Repeated calls give equal signatures."""
        assert classify("well-known") == classify("well-known")

    def test_same_shape_and_suffix_share_bucket(self) -> None:
        """Different words with the same features share a signature."""
        assert classify("CATS") == classify("DOGS")
        assert classify("cats") != classify("CATS")

    def test_signature_fields(self) -> None:
        """Signature exposes shape and suffix."""
        signature = classify("co-workers")

        assert isinstance(signature, WordSignature)
        assert signature.shape.has_hyphen
        assert signature.suffix == "ers"

    def test_bucket_detection(self) -> None:
        """Bucket keys are recognized; ordinary words are not."""
        assert is_unknown_word_bucket(str(classify("zebra")))
        assert not is_unknown_word_bucket("zebra")
