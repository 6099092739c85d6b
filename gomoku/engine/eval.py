from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Tuple

from .bitboard import AXES, BOARD_MASK, WINDOW_STARTS, Axis


# Fixed, hand-authored weights. Placeholders, not tuned for strong play.
class Threat(enum.IntEnum):
    BROKEN_THREE = 10_000
    THREE = 20_000
    FOUR = 50_000
    STRAIGHT_FOUR = 500_000
    FIVE = 5_000_000  # terminal, never summed into a score


class EvalKind(enum.Enum):
    WON = "won"
    LOST = "lost"
    SCORE = "score"


@dataclass(frozen=True)
class Eval:
    kind: EvalKind
    score: int = 0

    @staticmethod
    def of(score: int) -> "Eval":
        return Eval(EvalKind.SCORE, score)

    @property
    def is_terminal(self) -> bool:
        return self.kind is not EvalKind.SCORE


WON = Eval(EvalKind.WON)
LOST = Eval(EvalKind.LOST)


class Evaluator(Protocol):
    def evaluate(self, own: int, opp: int) -> Eval:
        ...


WINDOW_LENGTHS = (7, 6, 5)


def _bits(*cells: int) -> int:
    # window cell k maps to bit k
    return sum(c << k for k, c in enumerate(cells))


THREE_SHAPES = {
    7: (_bits(0, 0, 1, 1, 1, 0, 0),),
    6: (_bits(0, 1, 1, 1, 0, 0), _bits(0, 0, 1, 1, 1, 0)),
}
BROKEN_THREE_SHAPES = (_bits(0, 1, 0, 1, 1, 0), _bits(0, 1, 1, 0, 1, 0))
STRAIGHT_FOUR_SHAPE = _bits(0, 1, 1, 1, 1, 0)
FIVE_SHAPE = _bits(1, 1, 1, 1, 1)


def classify_shape(length: int, shape: int) -> Optional[Threat]:
    """Threat formed by own stones `shape` in an opponent-free window of `length` cells."""
    if length == 5 and shape == FIVE_SHAPE:
        return Threat.FIVE

    ones = shape.bit_count()
    if ones == 4:
        if length == 6 and shape == STRAIGHT_FOUR_SHAPE:
            return Threat.STRAIGHT_FOUR
        if length == 5:
            return Threat.FOUR
    elif ones == 3:
        if shape in THREE_SHAPES.get(length, ()):
            return Threat.THREE
        if length == 6 and shape in BROKEN_THREE_SHAPES:
            return Threat.BROKEN_THREE
    return None


def _shapes_of_length(length: int) -> List[Tuple[int, Threat]]:
    shapes = []
    for shape in range(1 << length):
        threat = classify_shape(length, shape)
        if threat is not None:
            shapes.append((shape, threat))
    return shapes


# Every (shape, threat) per window length, derived from the classifier
SHAPES: Dict[int, List[Tuple[int, Threat]]] = {length: _shapes_of_length(length) for length in WINDOW_LENGTHS}


class ThreatEvaluator:
    """Line-pattern evaluator scanning the four axes.

    Matching is done for all window starts of an axis at once with shifted
    bitboards; each maximal run of consecutive matching starts along the
    axis then contributes its single strongest threat. A five for either
    side ends the evaluation.
    """

    def __init__(self) -> None:
        # (window length - 5, raw window byte) -> threat
        self.threat_cache: Dict[Tuple[int, int], Optional[Threat]] = {}

    def evaluate(self, own: int, opp: int) -> Eval:
        empty = BOARD_MASK & ~(own | opp)
        own_active = own.bit_count() >= 3
        opp_active = opp.bit_count() >= 3
        total = 0
        for axis in AXES:
            d = int(axis)
            empty_sh = [empty >> (k * d) for k in range(7)]
            if own_active:
                result = self._evaluate_side(own, opp, empty_sh, axis)
                if result is None:
                    return WON
                total += result
            if opp_active:
                result = self._evaluate_side(opp, own, empty_sh, axis)
                if result is None:
                    return LOST
                total -= result
        return Eval.of(total)

    def _evaluate_side(self, own: int, opp: int, empty_sh: List[int], axis: Axis) -> Optional[int]:
        """Score of `own` threats on one axis, or None when `own` has five in a row."""
        d = int(axis)
        own_sh = [own >> (k * d) for k in range(7)]
        hits: Dict[int, int] = {}
        starts = 0
        for length in WINDOW_LENGTHS:
            found = 0
            for shape, threat in SHAPES[length]:
                m = WINDOW_STARTS[(axis, length)]
                for k in range(length):
                    m &= own_sh[k] if (shape >> k) & 1 else empty_sh[k]
                    if not m:
                        break
                if not m:
                    continue
                if threat is Threat.FIVE:
                    return None
                found |= m
            hits[length] = found
            starts |= found
        if not starts:
            return 0

        score = 0
        heads = starts & ~(starts << d)
        while heads:
            lsb = heads & -heads
            heads ^= lsb
            index = lsb.bit_length() - 1
            best: Optional[Threat] = None
            while (starts >> index) & 1:
                for length in WINDOW_LENGTHS:
                    if not (hits[length] >> index) & 1:
                        continue
                    threat = self.match_threat(
                        self._window(own, index, d, length),
                        self._window(opp, index, d, length),
                        length,
                    )
                    if threat is not None and (best is None or threat > best):
                        best = threat
                index += d
            if best is not None:
                score += int(best)
        return score

    @staticmethod
    def _window(bb: int, index: int, d: int, length: int) -> int:
        return sum(((bb >> (index + k * d)) & 1) << k for k in range(length))

    def match_threat(self, own_window: int, opp_window: int, length: int) -> Optional[Threat]:
        if opp_window:
            return None
        key = (length - 5, own_window)
        try:
            return self.threat_cache[key]
        except KeyError:
            threat = classify_shape(length, own_window)
            self.threat_cache[key] = threat
            return threat
