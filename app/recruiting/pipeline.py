"""
Kanban board of applicants grouped by pipeline stage.

Moves are applied to the board first and undone when the API refuses them,
so the board a manager sees always matches what the API accepted.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from core.api import ApiError
from .constants import STAGE_CHOICES

logger = logging.getLogger(__name__)

STAGES = [code for code, label in STAGE_CHOICES]


@dataclass
class StageMove:
    applicant_id: str
    from_stage: str
    to_stage: str
    from_index: int


@dataclass
class PipelineBoard:
    columns: Dict[str, List[dict]] = field(default_factory=dict)

    @classmethod
    def from_applicants(cls, applicants, stages=None) -> 'PipelineBoard':
        board = cls(columns={stage: [] for stage in (stages or STAGES)})
        for applicant in applicants:
            stage = applicant.get('stage')
            if stage in board.columns:
                board.columns[stage].append(applicant)
        return board

    def find(self, applicant_id: str) -> Optional[Tuple[str, int, dict]]:
        for stage, cards in self.columns.items():
            for index, card in enumerate(cards):
                if str(card.get('id')) == str(applicant_id):
                    return stage, index, card
        return None

    def move(self, applicant_id: str, stage: str) -> StageMove:
        """Move a card to the top of ``stage`` and return what was done."""
        if stage not in self.columns:
            raise ValueError(f"Unknown stage: {stage}")
        found = self.find(applicant_id)
        if found is None:
            raise KeyError(applicant_id)

        from_stage, index, card = found
        move = StageMove(str(applicant_id), from_stage, stage, index)
        if from_stage == stage:
            return move

        self.columns[from_stage].pop(index)
        card['stage'] = stage
        self.columns[stage].insert(0, card)
        return move

    def rollback(self, move: StageMove) -> None:
        """Put a card back where it was before ``move``."""
        if move.from_stage == move.to_stage:
            return
        found = self.find(move.applicant_id)
        if found is None:
            return
        stage, index, card = found
        self.columns[stage].pop(index)
        card['stage'] = move.from_stage
        self.columns[move.from_stage].insert(move.from_index, card)

    def counts(self) -> Dict[str, int]:
        return {stage: len(cards) for stage, cards in self.columns.items()}


def move_applicant(api, board: PipelineBoard, applicant_id: str, stage: str) -> StageMove:
    """
    Move an applicant on the board, then persist the move.

    Raises:
        ApiError: when the API rejects the move; the board is rolled back first.
    """
    move = board.move(applicant_id, stage)
    if move.from_stage == move.to_stage:
        return move

    try:
        api.patch(f'/applicants/{applicant_id}/stage', {'stage': stage})
    except ApiError as e:
        logger.warning(
            f"Stage move {move.from_stage} -> {stage} for applicant {applicant_id} failed: {e.message}"
        )
        board.rollback(move)
        raise

    logger.info(f"Moved applicant {applicant_id} from {move.from_stage} to {stage}")
    return move
