"""
Tests for green and blue box scoring.
"""

import pytest

from box_game.box_core.boxes import (
    BlueBox,
    BoxKind,
    GreenBox,
    make_blue_box,
    make_box,
    make_green_box,
    pairing,
)


class TestAbsorb:
    """Test absorption bookkeeping shared by both box kinds."""

    @pytest.mark.parametrize("factory", [make_green_box, make_blue_box])
    def test_weight_is_initial_plus_absorbed(self, factory):
        """Current weight should equal initial weight plus every token."""
        box = factory(0.3)
        for token in [4, 0, 7, 1]:
            box.absorb(token)

        assert box.current_weight == pytest.approx(0.3 + 12)
        assert box.initial_weight == 0.3

    def test_history_keeps_order(self):
        """Absorbed tokens should be kept in absorption order, never truncated."""
        box = make_green_box(0.0)
        tokens = [5, 1, 9, 2, 8, 3]
        for token in tokens:
            box.absorb(token)

        assert box.absorbed_weights == tuple(tokens)
        assert box.absorbed_count == len(tokens)

    def test_score_does_not_mutate(self):
        """Scoring twice should give the same value and leave weight alone."""
        box = make_blue_box(0.2)
        box.absorb(3)
        box.absorb(6)

        first = box.score()
        assert box.score() == first
        assert box.current_weight == pytest.approx(9.2)

    def test_boxes_compare_by_weight(self):
        """Boxes order by current weight."""
        light = make_green_box(0.0)
        heavy = make_blue_box(0.2)
        assert light < heavy

        light.absorb(1)
        assert heavy < light

    @pytest.mark.parametrize("factory", [make_green_box, make_blue_box])
    def test_empty_history_scores_zero(self, factory):
        """A box that absorbed nothing scores 0."""
        assert factory(0.0).score() == 0.0


class TestGreenBox:
    """Test the squared-mean-of-recent-tokens score."""

    def test_single_token(self):
        box = GreenBox(0.0)
        box.absorb(3)
        assert box.score() == 9.0

    def test_fewer_than_three_uses_all(self):
        """With fewer than 3 tokens the mean covers the whole history."""
        box = GreenBox(0.0)
        box.absorb(1)
        box.absorb(5)
        assert box.score() == 9.0

    def test_window_uses_last_three(self):
        """Score after 4 tokens ignores the first one."""
        box = GreenBox(0.1)
        for token in [1000, 2, 3, 4]:
            box.absorb(token)

        assert box.score() == pytest.approx(((2 + 3 + 4) / 3) ** 2)

    def test_first_token_does_not_matter_after_four(self):
        """Two boxes differing only in the first token score the same."""
        a = GreenBox(0.0)
        b = GreenBox(0.0)
        for token in [1, 6, 7, 8]:
            a.absorb(token)
        for token in [99, 6, 7, 8]:
            b.absorb(token)

        assert a.score() == b.score() == 49.0

    def test_large_weights_do_not_overflow(self):
        """Means of max uint32 tokens stay exact in floating point."""
        big = 2**32 - 1
        box = GreenBox(0.0)
        for _ in range(3):
            box.absorb(big)

        assert box.score() == float(big) ** 2

    def test_invalid_window(self):
        with pytest.raises(ValueError):
            GreenBox(0.0, window=0)

    def test_kind(self):
        assert GreenBox(0.0).kind is BoxKind.GREEN


class TestBlueBox:
    """Test the Cantor pairing score."""

    def test_pairing_defining_value(self):
        assert pairing(0, 1) == 2

    def test_pairing_values(self):
        assert pairing(0, 0) == 0
        assert pairing(1, 0) == 1
        assert pairing(2, 9) == 75

    def test_min_max_over_whole_history(self):
        """[5, 2, 9] pairs min 2 with max 9."""
        box = BlueBox(0.2)
        for token in [5, 2, 9]:
            box.absorb(token)

        assert box.score() == 75.0

    def test_single_token_pairs_with_itself(self):
        box = BlueBox(0.2)
        box.absorb(2)
        assert box.score() == 12.0

    def test_middle_token_leaves_score(self):
        """A token that is neither new min nor new max keeps the score."""
        box = BlueBox(0.3)
        box.absorb(3)
        box.absorb(21)
        before = box.score()

        box.absorb(10)
        assert box.score() == before == 321.0

    def test_large_weights_do_not_overflow(self):
        big = 2**32 - 1
        box = BlueBox(0.0)
        box.absorb(0)
        box.absorb(big)

        assert box.score() == float(big * (big + 1) // 2 + big)

    def test_kind(self):
        assert BlueBox(0.0).kind is BoxKind.BLUE


class TestFactories:
    """Test box construction helpers."""

    def test_make_box_by_kind(self):
        assert isinstance(make_box(BoxKind.GREEN, 0.0), GreenBox)
        assert isinstance(make_box("blue", 0.2), BlueBox)

    def test_make_box_passes_window(self):
        box = make_box("green", 0.0, green_window=2)
        assert box.window == 2

    def test_make_box_unknown_kind(self):
        with pytest.raises(ValueError):
            make_box("red", 0.0)
