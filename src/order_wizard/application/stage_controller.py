"""Stage controller — the wizard's navigation state machine.

Four named states, two transitions. Knows nothing about forms or the
Order; it only tracks where the user is and which stages were submitted.
"""

from __future__ import annotations

import logging
from enum import IntEnum

from order_wizard.domain.exceptions import OutOfRangeError, StageIncompleteError

logger = logging.getLogger(__name__)


class Stage(IntEnum):
    CUSTOMER_INFO = 1
    PRODUCT_SELECTION = 2
    CONTRACT_TERMS = 3
    REVIEW = 4

    @property
    def title(self) -> str:
        return _TITLES[self]

    @classmethod
    def from_number(cls, number: int) -> Stage:
        try:
            return cls(number)
        except ValueError:
            raise OutOfRangeError(
                f"Stage {number!r} is outside 1..{len(cls)}"
            ) from None


_TITLES = {
    Stage.CUSTOMER_INFO: "Customer Information",
    Stage.PRODUCT_SELECTION: "Product Selection",
    Stage.CONTRACT_TERMS: "Contract Terms",
    Stage.REVIEW: "Review & Finalize",
}

FIRST_STAGE = Stage.CUSTOMER_INFO
LAST_STAGE = Stage.REVIEW


class StageController:
    """Tracks the active stage.

    Forward navigation is permissive unless *enforce_order* is set, in
    which case every stage before the target must have been completed.
    """

    def __init__(self, enforce_order: bool = False) -> None:
        self._current = FIRST_STAGE
        self._completed: set[Stage] = set()
        self._enforce_order = enforce_order

    @property
    def current(self) -> Stage:
        return self._current

    @property
    def enforce_order(self) -> bool:
        return self._enforce_order

    # --- Transitions ----------------------------------------------------------

    def advance(self) -> Stage:
        if self._current == LAST_STAGE:
            return self._current
        return self._move(Stage(self._current + 1))

    def retreat(self) -> Stage:
        if self._current == FIRST_STAGE:
            return self._current
        return self._move(Stage(self._current - 1))

    def go_to(self, number: int) -> Stage:
        return self._move(Stage.from_number(number))

    def check_advance(self, after_completing: Stage) -> None:
        """Raise StageIncompleteError if advance() would be refused once
        *after_completing* is marked complete. Changes nothing."""
        if self._current == LAST_STAGE:
            return
        self._check_reachable(
            Stage(self._current + 1), self._completed | {after_completing}
        )

    def reset(self) -> None:
        self._current = FIRST_STAGE
        self._completed.clear()

    # --- Completion tracking --------------------------------------------------

    def mark_complete(self, stage: Stage) -> None:
        self._completed.add(stage)

    def is_complete(self, stage: Stage) -> bool:
        return stage in self._completed

    # --- Internal helpers -----------------------------------------------------

    def _check_reachable(self, target: Stage, completed: set[Stage]) -> None:
        if not self._enforce_order or target <= self._current:
            return
        for stage in Stage:
            if stage >= target:
                break
            if stage not in completed:
                raise StageIncompleteError(
                    f"Complete '{stage.title}' before moving to '{target.title}'"
                )

    def _move(self, target: Stage) -> Stage:
        self._check_reachable(target, self._completed)
        if target != self._current:
            logger.debug("Stage %s -> %s", self._current.name, target.name)
        self._current = target
        return target
