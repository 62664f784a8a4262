import pytest

from avim.editor.autofix import BoundaryCorrector
from avim.editor.clips import ClipStore
from avim.errors import InsufficientAdjustmentSamples, LowCorrectionConfidence
from conftest import make_clips


def test_manual_confirm_moves_selected_words_and_flags_both() -> None:
    store = ClipStore(make_clips("A B", "C D E"))
    corrector = BoundaryCorrector()

    assert corrector.confirm(store, 1) == 2

    assert store[0].transcript == "A B C D"
    assert store[1].transcript == "E"
    assert store[0].is_manually_adjusted
    assert store[1].is_manually_adjusted
    assert corrector.samples == [2]


def test_manual_confirm_out_of_range_records_nothing() -> None:
    store = ClipStore(make_clips("A", ""))
    corrector = BoundaryCorrector()
    assert corrector.confirm(store, 0) == 0
    assert corrector.samples == []
    assert not store[0].is_manually_adjusted


def test_fit_requires_samples() -> None:
    with pytest.raises(InsufficientAdjustmentSamples):
        BoundaryCorrector().fit()


def test_fit_refuses_inconsistent_samples() -> None:
    corrector = BoundaryCorrector(samples=[1, 5])
    with pytest.raises(LowCorrectionConfidence) as excinfo:
        corrector.fit()
    assert excinfo.value.stddev == pytest.approx(2.0)
    assert "2.00" in str(excinfo.value)


def test_fit_rounds_mean() -> None:
    assert BoundaryCorrector(samples=[2, 2, 3]).fit() == 2
    assert BoundaryCorrector(samples=[2, 3]).fit() == 3


def test_apply_moves_mean_words_on_unlocked_pairs() -> None:
    store = ClipStore(make_clips("P Q", "X Y Z W"))
    corrector = BoundaryCorrector(samples=[2, 2, 3])

    report = corrector.apply(store, corrector.fit())

    assert store[0].transcript == "P Q X Y"
    assert store[1].transcript == "Z W"
    assert report.words_moved == 2
    # Automatic moves do not lock clips or feed back samples
    assert not store[0].is_manually_adjusted
    assert corrector.samples == [2, 2, 3]


def test_apply_skips_manually_adjusted_pairs() -> None:
    clips = make_clips("a", "b c d", "e f g", "h i j")
    clips[1].is_manually_adjusted = True
    store = ClipStore(clips)

    report = BoundaryCorrector().apply(store, 1)

    # Pairs (0,1) and (1,2) touch a locked clip; only (2,3) moves
    assert [c.transcript for c in store] == ["a", "b c d", "e f g h", "i j"]
    assert report.words_moved == 1


def test_apply_walks_pairs_from_the_end() -> None:
    store = ClipStore(make_clips("a", "b c", "d e"))
    BoundaryCorrector().apply(store, 1)
    # (1,2) first: "b c d" / "e"; then (0,1): "a b" / "c d"
    assert [c.transcript for c in store] == ["a b", "c d", "e"]


def test_apply_requires_more_words_than_moved() -> None:
    store = ClipStore(make_clips("a", "b c"))
    report = BoundaryCorrector().apply(store, 2)
    assert report.words_moved == 0
    assert store[1].transcript == "b c"


def test_apply_prunes_blank_clips() -> None:
    store = ClipStore(make_clips("a", "   ", "b c"))
    report = BoundaryCorrector().apply(store, 5)
    assert [c.transcript for c in store] == ["a", "b c"]
    assert report.clips_removed == 1
