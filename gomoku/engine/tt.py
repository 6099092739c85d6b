from __future__ import annotations

import threading
from typing import Callable, Dict, Optional, Tuple

from .bitboard import Player
from .eval import Eval

TTKey = Tuple[int, Player]


class TranspositionTable:
    """(position hash, player) -> Eval, shared by every search frame.

    Entries are never evicted: an evaluation of a position for a player does
    not change. Racing writers may compute the same entry twice; the last
    write wins.
    """

    def __init__(self) -> None:
        self.store: Dict[TTKey, Eval] = {}
        self._lock = threading.Lock()
        self.stats = {"lookups": 0, "hits": 0, "stores": 0}

    def probe(self, hash_: int, player: Player) -> Optional[Eval]:
        with self._lock:
            self.stats["lookups"] += 1
            e = self.store.get((hash_, player))
            if e is not None:
                self.stats["hits"] += 1
            return e

    def save(self, hash_: int, player: Player, value: Eval) -> None:
        with self._lock:
            self.stats["stores"] += 1
            self.store[(hash_, player)] = value

    def get_or_compute(self, hash_: int, player: Player, compute: Callable[[], Eval]) -> Eval:
        e = self.probe(hash_, player)
        if e is not None:
            return e
        # Computed outside the lock so workers do not serialise on evaluation
        value = compute()
        self.save(hash_, player, value)
        return value

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self.stats, entries=len(self.store))

    def __len__(self) -> int:
        return len(self.store)
