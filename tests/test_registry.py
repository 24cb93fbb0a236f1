"""Tests for the vocabulary and tag registry."""

from hmmtag.pipeline.registry import SENTENCE_END, SENTENCE_START, CountRegistry


class TestCountRegistry:
    """Count accumulation tests."""

    def test_unseen_keys_are_zero(self) -> None:
        """Counts default to zero without raising."""
        registry = CountRegistry()

        assert registry.tag_counts["NN"] == 0
        assert registry.word_counts["dog"] == 0
        assert registry.emission_counts[("dog", "NN")] == 0
        assert registry.transition_counts[("NN", "VB")] == 0

    def test_observe_counts_all_three(self) -> None:
        """observe() increments tag, word and pair counts."""
        registry = CountRegistry()
        registry.observe("DOG", "NN")
        registry.observe("DOG", "NN")
        registry.observe("DOG", "VB")

        assert registry.tag_counts["NN"] == 2
        assert registry.tag_counts["VB"] == 1
        assert registry.word_counts["DOG"] == 3
        assert registry.emission_counts[("DOG", "NN")] == 2
        assert registry.emission_counts[("DOG", "VB")] == 1

    def test_observe_transition(self) -> None:
        """observe_transition() only touches transition counts."""
        registry = CountRegistry()
        registry.observe_transition("NN", "VB")
        registry.observe_transition("NN", "VB")

        assert registry.transition_counts[("NN", "VB")] == 2
        assert registry.tag_counts["NN"] == 0

    def test_tags_in_first_seen_order(self) -> None:
        """Tags keep registration order without duplicates."""
        registry = CountRegistry()
        registry.observe_tag(SENTENCE_START)
        registry.observe("a", "DT")
        registry.observe("b", "NN")
        registry.observe("c", "DT")
        registry.observe_transition("NN", SENTENCE_END)

        assert registry.tags == (SENTENCE_START, "DT", "NN", SENTENCE_END)

    def test_surface_form_first_seen(self) -> None:
        """The first surface spelling is kept for each key."""
        registry = CountRegistry()
        registry.observe("DOG", "NN", surface="Dog")
        registry.observe("DOG", "NN", surface="dog")

        assert registry.surface_form("DOG") == "Dog"
        assert registry.surface_form("CAT") == "CAT"
