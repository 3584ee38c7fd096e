"""Study session state machine.

A ``StudySession`` is the in-memory browsing state over one deck's cards:
the (possibly shuffled) order, the current position, whether the current
card is flipped, and which cards have been marked studied. It is never
persisted and never touches the stored card order.

The session is not thread safe. One session serves one view, and callers
serialize keyboard and pointer input before invoking it.
"""

import enum
import random
from typing import Callable, Dict, Generic, Hashable, List, Optional, Protocol, Sequence, Set, TypeVar


class StudyCard(Protocol):
    @property
    def id(self) -> Hashable: ...


C = TypeVar("C", bound=StudyCard)


class SessionState(enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class StudySession(Generic[C]):
    """Browse a non-empty list of cards, tracking studied progress.

    Args:
        cards: the deck's cards in stored order. Must be non-empty and must
            not contain two cards with the same ``id``; both are precondition
            violations and raise ``ValueError``.
        rng: source of randomness for :meth:`shuffle`. Defaults to a fresh
            ``random.Random``.
    """

    def __init__(self, cards: Sequence[C], rng: Optional[random.Random] = None):
        if not cards:
            raise ValueError("StudySession needs at least one card")
        ids = [card.id for card in cards]
        if len(set(ids)) != len(ids):
            raise ValueError("StudySession cards must have unique ids")

        self._original: List[C] = list(cards)
        self._order: List[C] = list(cards)
        self._rng = rng or random.Random()
        self.index = 0
        self.is_flipped = False
        self.is_shuffled = False
        self._studied: Set[Hashable] = set()

    # -- read-only views --------------------------------------------------

    @property
    def cards(self) -> List[C]:
        return list(self._order)

    @property
    def length(self) -> int:
        return len(self._order)

    def __len__(self) -> int:
        return len(self._order)

    @property
    def current_card(self) -> C:
        return self._order[self.index]

    @property
    def position(self) -> int:
        """1-based position of the current card."""
        return self.index + 1

    @property
    def progress(self) -> int:
        """Percent of the way through the deck by position, rounded."""
        return round(self.position / self.length * 100)

    @property
    def studied(self) -> frozenset:
        return frozenset(self._studied)

    @property
    def studied_count(self) -> int:
        return len(self._studied)

    def is_studied(self, card_id: Hashable) -> bool:
        return card_id in self._studied

    @property
    def state(self) -> SessionState:
        if len(self._studied) == self.length:
            return SessionState.COMPLETED
        return SessionState.ACTIVE

    @property
    def is_completed(self) -> bool:
        return self.state is SessionState.COMPLETED

    # -- transitions ------------------------------------------------------

    def advance(self) -> None:
        """Mark the current card studied and move to the next one.

        No-op on the last card (it can only be studied via
        :meth:`mark_studied`) and once the session is completed.
        """
        if self.is_completed or self.index >= self.length - 1:
            return
        self._studied.add(self.current_card.id)
        self.index += 1
        self.is_flipped = False

    def retreat(self) -> None:
        """Move to the previous card. The studied set is left alone."""
        if self.is_completed or self.index == 0:
            return
        self.index -= 1
        self.is_flipped = False

    def flip(self) -> None:
        self.is_flipped = not self.is_flipped

    def mark_studied(self) -> None:
        if self.is_completed:
            return
        self._studied.add(self.current_card.id)
        self.advance()

    def shuffle(self) -> None:
        """Reorder a copy of the original cards uniformly at random.

        Position and flip are reset; studied progress is kept.
        """
        order = list(self._original)
        self._rng.shuffle(order)
        self._order = order
        self.index = 0
        self.is_flipped = False
        self.is_shuffled = True

    def reset(self) -> None:
        """Start over in the current order with no studied cards."""
        self.index = 0
        self.is_flipped = False
        self._studied.clear()

    # -- keyboard ---------------------------------------------------------

    def _key_bindings(self) -> Dict[str, Callable[[], None]]:
        return {
            " ": self.flip,
            "Enter": self.flip,
            "ArrowRight": self.advance,
            "ArrowLeft": self.retreat,
            "r": self.reset,
            "s": self.shuffle,
        }

    def handle_key(self, key: str) -> bool:
        """Dispatch a keyboard shortcut. Returns False for unbound keys."""
        action = self._key_bindings().get(key)
        if action is None:
            return False
        action()
        return True

    def __repr__(self) -> str:
        return (
            f"StudySession(index={self.index}, length={self.length}, "
            f"studied={self.studied_count}, flipped={self.is_flipped}, state={self.state.value})"
        )
