"""Match aggregator - folds a list of Match records into per-model accumulators.

Aggregation rules:
- Grouping key: participant ``display_name`` (not ``id``)
- Counts (matches, wins, losses, draws, rounds): sum
- Score classification (2-0 / 2-1): from the winner's recorded score fields
- Comebacks: replay rounds in order and track the winner's largest deficit
- Rates / shares / averages: computed in a second pass, 0.0 on empty denominators
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from arena_dashboard.types import ModelAccumulator

if TYPE_CHECKING:
    from collections.abc import Iterable

    from arena_dashboard.types import Match

logger = logging.getLogger(__name__)


@dataclass
class Accumulation:
    """Output of the accumulation pass.

    Attributes:
        models: Accumulators keyed by display name, in first-seen order.
        round_matches: Valid matches that carry round data, in input order.
        total_matches: Number of valid matches consumed.
        skipped: Number of malformed matches excluded.
    """

    models: dict[str, ModelAccumulator] = field(default_factory=dict)
    round_matches: list[Match] = field(default_factory=list)
    total_matches: int = 0
    skipped: int = 0


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


class MatchAggregator:
    """Aggregates completed matches into per-model statistics."""

    @staticmethod
    def accumulate(matches: Iterable[Match]) -> Accumulation:
        """Run the accumulation pass over ``matches``.

        Args:
            matches: Match records, in any order.

        Returns:
            Fresh Accumulation; no state is shared between calls.

        Note:
            Matches missing either participant are skipped silently.
        """
        acc = Accumulation()

        for match in matches:
            if not match.is_valid:
                acc.skipped += 1
                continue

            p1 = MatchAggregator._get(acc.models, match.player1.display_name)
            p2 = MatchAggregator._get(acc.models, match.player2.display_name)
            acc.total_matches += 1

            # Counted separately so a self-play match still books two appearances
            p1.total_matches += 1
            p2.total_matches += 1

            num_rounds = len(match.rounds)
            if num_rounds > 0:
                p1.total_rounds += num_rounds
                p2.total_rounds += num_rounds
                p1.rounds_matches += 1
                p2.rounds_matches += 1
                acc.round_matches.append(match)

            winner, loser, winner_score, loser_score = MatchAggregator._resolve(match, p1, p2)
            if winner is None or loser is None:
                p1.draws += 1
                p2.draws += 1
                continue

            winner.wins += 1
            loser.losses += 1

            if (winner_score, loser_score) == (2, 0):
                winner.sweeps20 += 1
                winner.wins20 += 1
            elif (winner_score, loser_score) == (2, 1):
                winner.wins21 += 1

            if num_rounds > 0 and MatchAggregator.detect_comeback(match) is not None:
                winner.comebacks += 1

        if acc.skipped:
            logger.debug(f"Skipped {acc.skipped} match(es) with missing participants")
        return acc

    @staticmethod
    def detect_comeback(match: Match) -> int | None:
        """Return the winner's largest round deficit, or None if never behind.

        Rounds are replayed in order. A drawn round, or one won by someone
        other than the two participants, leaves both tallies unchanged.

        Args:
            match: Match with a winner and round data.

        Returns:
            Maximum deficit (> 0) when the winner trailed at some point,
            otherwise None.
        """
        if match.player1 is None or match.player2 is None:
            return None
        p1_id = match.player1.id
        p2_id = match.player2.id
        if p1_id is None or p2_id is None or match.winner_id is None or not match.rounds:
            return None

        if match.winner_id == p1_id:
            winner_id, opponent_id = p1_id, p2_id
        elif match.winner_id == p2_id:
            winner_id, opponent_id = p2_id, p1_id
        else:
            return None

        winner_tally = 0
        opponent_tally = 0
        max_deficit = 0
        for rnd in match.rounds:
            if rnd.winner_id == winner_id:
                winner_tally += 1
            elif rnd.winner_id == opponent_id:
                opponent_tally += 1
            max_deficit = max(max_deficit, opponent_tally - winner_tally)

        return max_deficit if max_deficit > 0 else None

    @staticmethod
    def derive(models: dict[str, ModelAccumulator]) -> dict[str, ModelAccumulator]:
        """Fill in rate, share and average fields in place.

        Returns:
            The same mapping, for chaining.
        """
        for model in models.values():
            model.avg_rounds = _ratio(model.total_rounds, model.rounds_matches)
            model.win_rate = _ratio(model.wins, model.total_matches)
            model.win_share20 = _ratio(model.wins20, model.wins)
            model.win_share21 = _ratio(model.wins21, model.wins)
        return models

    @staticmethod
    def _get(models: dict[str, ModelAccumulator], name: str) -> ModelAccumulator:
        model = models.get(name)
        if model is None:
            model = ModelAccumulator(display_name=name)
            models[name] = model
        return model

    @staticmethod
    def _resolve(
        match: Match, p1: ModelAccumulator, p2: ModelAccumulator
    ) -> tuple[ModelAccumulator | None, ModelAccumulator | None, int | None, int | None]:
        """Map ``winner_id`` to (winner, loser, winner_score, loser_score).

        A missing winner, or a winner id matching neither participant,
        resolves to a draw.
        """
        if match.winner_id is None:
            return None, None, None, None
        if match.player1 is not None and match.winner_id == match.player1.id:
            return p1, p2, match.player1_score, match.player2_score
        if match.player2 is not None and match.winner_id == match.player2.id:
            return p2, p1, match.player2_score, match.player1_score
        logger.debug(f"Winner {match.winner_id} is not a participant of {match.label}")
        return None, None, None, None
