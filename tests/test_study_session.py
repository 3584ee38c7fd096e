import random
from dataclasses import dataclass

import pytest

from flashdeck.study.session import SessionState, StudySession


@dataclass(frozen=True)
class FakeCard:
    id: str
    front_side: str = ""
    back_side: str = ""


def make_cards(*ids):
    return [FakeCard(i, front_side=f"front {i}", back_side=f"back {i}") for i in ids]


@pytest.fixture
def abc():
    return make_cards("A", "B", "C")


def test_empty_card_list_is_rejected():
    with pytest.raises(ValueError):
        StudySession([])


def test_duplicate_ids_are_rejected():
    with pytest.raises(ValueError):
        StudySession(make_cards("A", "A"))


def test_new_session_starts_at_first_card(abc):
    session = StudySession(abc)
    assert session.index == 0
    assert session.current_card.id == "A"
    assert not session.is_flipped
    assert session.studied_count == 0
    assert session.state is SessionState.ACTIVE
    assert session.position == 1
    assert session.progress == 33


def test_flip_then_mark_studied_through_completion(abc):
    session = StudySession(abc)

    session.flip()
    assert session.is_flipped
    session.mark_studied()
    assert session.studied == {"A"}
    assert session.index == 1
    assert not session.is_flipped

    session.mark_studied()
    assert session.studied == {"A", "B"}
    assert session.index == 2

    session.mark_studied()
    assert session.studied == {"A", "B", "C"}
    assert session.state is SessionState.COMPLETED
    assert session.is_completed
    assert session.index == 2


def test_advance_marks_current_and_moves(abc):
    session = StudySession(abc)
    session.flip()
    session.advance()
    assert session.index == 1
    assert session.studied == {"A"}
    assert not session.is_flipped


def test_advance_on_last_card_is_noop(abc):
    session = StudySession(abc)
    session.advance()
    session.advance()
    assert session.index == 2
    session.flip()
    session.advance()
    assert session.index == 2
    assert session.studied == {"A", "B"}
    assert session.is_flipped
    assert session.state is SessionState.ACTIVE


def test_retreat_keeps_studied_set(abc):
    session = StudySession(abc)
    session.advance()
    session.flip()
    session.retreat()
    assert session.index == 0
    assert not session.is_flipped
    assert session.studied == {"A"}


def test_retreat_at_first_card_is_noop(abc):
    session = StudySession(abc)
    session.retreat()
    assert session.index == 0


def test_flip_toggles_only_flip_state(abc):
    session = StudySession(abc)
    session.flip()
    session.flip()
    assert not session.is_flipped
    assert session.index == 0
    assert session.studied_count == 0


def test_completion_is_independent_of_traversal_order(abc):
    session = StudySession(abc)
    session.advance()  # A
    session.advance()  # B
    session.retreat()
    session.retreat()
    session.mark_studied()  # A again, moves to B
    assert session.state is SessionState.ACTIVE
    session.advance()  # B again, moves to C
    assert session.index == 2
    session.mark_studied()  # C
    assert session.is_completed


def test_moves_are_ignored_once_completed():
    session = StudySession(make_cards("A"))
    session.mark_studied()
    assert session.is_completed
    session.advance()
    session.retreat()
    session.mark_studied()
    assert session.index == 0
    assert session.studied_count == 1


def test_reset_clears_progress_and_keeps_order(abc):
    session = StudySession(abc, rng=random.Random(3))
    session.shuffle()
    order = [c.id for c in session.cards]
    for _ in range(3):
        session.mark_studied()
    assert session.is_completed

    session.reset()
    assert session.state is SessionState.ACTIVE
    assert session.index == 0
    assert session.studied_count == 0
    assert not session.is_flipped
    assert [c.id for c in session.cards] == order


def test_shuffle_keeps_studied_and_resets_position(abc):
    session = StudySession(abc, rng=random.Random(0))
    session.advance()
    session.flip()
    session.shuffle()
    assert session.index == 0
    assert not session.is_flipped
    assert session.studied == {"A"}
    assert session.is_shuffled


def test_shuffle_preserves_cards_and_never_touches_source_order():
    source = make_cards(*"ABCDEFGHIJ")
    snapshot = list(source)
    session = StudySession(source, rng=random.Random(42))
    for _ in range(20):
        session.shuffle()
        assert sorted(c.id for c in session.cards) == sorted(c.id for c in source)
        assert len(session.cards) == len(source)
    assert source == snapshot


def test_shuffle_is_uniform_enough():
    session = StudySession(make_cards("A", "B", "C"), rng=random.Random(1234))
    seen = {}
    for _ in range(6000):
        session.shuffle()
        key = "".join(c.id for c in session.cards)
        seen[key] = seen.get(key, 0) + 1
    assert len(seen) == 6
    assert all(800 < n < 1200 for n in seen.values())


@pytest.mark.parametrize("seed", range(25))
def test_random_walk_keeps_invariants(seed):
    rng = random.Random(seed)
    cards = make_cards(*[f"c{i}" for i in range(rng.randint(1, 8))])
    ids = {c.id for c in cards}
    session = StudySession(cards, rng=random.Random(seed))
    previous = 0
    for _ in range(200):
        op = rng.choice(["advance", "retreat", "flip", "mark_studied", "shuffle", "reset"])
        getattr(session, op)()
        assert 0 <= session.index < len(session)
        assert session.studied <= ids
        if op == "reset":
            assert session.studied_count == 0
        elif op in ("advance", "mark_studied", "shuffle", "retreat", "flip"):
            assert session.studied_count >= previous
        assert session.is_completed == (session.studied_count == len(session))
        previous = session.studied_count


@pytest.mark.parametrize(
    "key,expected_index,expected_flipped",
    [
        (" ", 0, True),
        ("Enter", 0, True),
        ("ArrowRight", 1, False),
        ("ArrowLeft", 0, False),
    ],
)
def test_keyboard_shortcuts(abc, key, expected_index, expected_flipped):
    session = StudySession(abc)
    assert session.handle_key(key)
    assert session.index == expected_index
    assert session.is_flipped == expected_flipped


def test_keyboard_reset_and_shuffle(abc):
    session = StudySession(abc, rng=random.Random(5))
    session.handle_key("ArrowRight")
    assert session.handle_key("s")
    assert session.is_shuffled
    assert session.studied_count == 1
    assert session.handle_key("r")
    assert session.studied_count == 0


def test_unbound_key_is_ignored(abc):
    session = StudySession(abc)
    assert not session.handle_key("x")
    assert session.index == 0
