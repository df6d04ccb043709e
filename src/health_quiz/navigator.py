"""StageNavigator: tracks the current stage and gates moves between stages.

Moves:
    advance()    only when the current stage validates; clamped at the last stage
    retreat()    whenever the cursor is past the first stage
    jump_to(i)   only to the current stage or an earlier one

Rejected moves are not errors.  Each method returns ``False`` and leaves the
cursor alone, which a UI shows as a disabled button.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from health_quiz.models.enums import StageStatus
from health_quiz.models.stage import StageDescriptor
from health_quiz.validator import can_advance

logger = logging.getLogger(__name__)


class StageNavigator:
    """Cursor over an ordered list of stages.

    Args:
        stages: the loaded stage list (read-only)
        answers: the session's answer record, read when validating
    """

    def __init__(
        self,
        stages: Sequence[StageDescriptor],
        answers: Mapping[str, Any],
    ) -> None:
        if not stages:
            raise ValueError("StageNavigator needs at least one stage")
        self._stages = stages
        self._answers = answers
        self._index = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_stage(self) -> StageDescriptor:
        return self._stages[self._index]

    @property
    def stage_count(self) -> int:
        return len(self._stages)

    @property
    def is_last(self) -> bool:
        return self._index == len(self._stages) - 1

    @property
    def can_advance(self) -> bool:
        """Whether the forward action is enabled right now."""
        return not self.is_last and can_advance(self.current_stage, self._answers)

    @property
    def can_retreat(self) -> bool:
        return self._index > 0

    @property
    def progress(self) -> float:
        """Percent of stages reached, counting the current one."""
        return (self._index + 1) / len(self._stages) * 100

    def stage_status(self, index: int) -> StageStatus:
        """Status of stage ``index`` for a progress indicator."""
        if index < self._index:
            return StageStatus.COMPLETE
        if index == self._index:
            return StageStatus.CURRENT
        return StageStatus.UPCOMING

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def advance(self) -> bool:
        """Move forward one stage if the current one validates."""
        if not can_advance(self.current_stage, self._answers):
            logger.debug("advance rejected: stage '%s' incomplete", self.current_stage.id)
            return False
        if self.is_last:
            logger.debug("advance rejected: already at last stage")
            return False
        self._index += 1
        logger.info("Advanced to stage %d (%s)", self._index, self.current_stage.id)
        return True

    def retreat(self) -> bool:
        """Move back one stage."""
        if self._index == 0:
            logger.debug("retreat rejected: already at first stage")
            return False
        self._index -= 1
        return True

    def jump_to(self, index: int) -> bool:
        """Jump to an already-reached stage; skipping ahead is not allowed."""
        if index < 0 or index > self._index:
            logger.debug("jump_to(%d) rejected: current stage is %d", index, self._index)
            return False
        self._index = index
        return True
