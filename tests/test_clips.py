from avim.editor.clips import ClipStore, join_words
from conftest import make_clips


def test_remove_current_clamps_cursor() -> None:
    store = ClipStore(make_clips("a", "b", "c"))
    store.current_index = 2
    removed = store.remove(2)
    assert removed.transcript == "c"
    assert store.current_index == 1
    assert [c.transcript for c in store] == ["a", "b"]


def test_remove_from_empty_store_is_noop() -> None:
    store = ClipStore()
    assert store.remove(0) is None
    assert len(store) == 0
    assert store.current_index == 0


def test_cursor_moves_clamp_at_both_ends() -> None:
    store = ClipStore(make_clips("a", "b"))
    store.move_cursor(-1)
    assert store.current_index == 0
    store.move_cursor(5)
    assert store.current_index == 1
    assert store.on_last_clip()


def test_move_leading_words_between_neighbours() -> None:
    store = ClipStore(make_clips("A B", "C D E"))
    assert store.move_leading_words(0, 2) == 2
    assert store[0].transcript == "A B C D"
    assert store[1].transcript == "E"


def test_move_leading_words_caps_at_available_words() -> None:
    store = ClipStore(make_clips("A", "B"))
    assert store.move_leading_words(0, 5) == 1
    assert store[1].transcript == ""


def test_move_leading_words_without_neighbour() -> None:
    store = ClipStore(make_clips("A"))
    assert store.move_leading_words(0, 1) == 0
    assert store[0].transcript == "A"


def test_prune_empty_keeps_order() -> None:
    store = ClipStore(make_clips("a", "  ", "c", ""))
    store.current_index = 3
    assert store.prune_empty() == 2
    assert [c.transcript for c in store] == ["a", "c"]
    assert store.current_index == 1


def test_next_id_after_deletions() -> None:
    store = ClipStore(make_clips("a", "b", "c"))
    store.remove(2)
    assert store.next_id() == 3
    assert ClipStore().next_id() == 1


def test_snapshot_is_independent() -> None:
    store = ClipStore(make_clips("a"))
    snapshot = store.snapshot()
    store[0].transcript = "changed"
    assert snapshot[0].transcript == "a"


def test_join_words_skips_blank_parts() -> None:
    assert join_words("", "C D") == "C D"
    assert join_words("A B ", " C") == "A B C"
