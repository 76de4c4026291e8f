"""
Logic-based agent.

Uses constraint propagation over 26-cell neighborhoods to find cells that
are certainly safe, and falls back to the lowest estimated mine
probability when no certain move exists.
"""
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

import numpy as np

from ..game.cell import EXPLODED_OBSERVATION, FLAGGED_OBSERVATION, HIDDEN_OBSERVATION
from ..game.coords import Bounds, Coordinate, neighbors_of
from .base_agent import BaseAgent


# ============================================================================
# Constraint Types
# ============================================================================

@dataclass(frozen=True)
class Constraint:
    """
    Exactly ``mine_count`` of ``cells`` are mines.

    A revealed 3 with five hidden neighbors and one flagged neighbor gives
    cells={the five}, mine_count=2.
    """

    cells: FrozenSet[Coordinate]
    mine_count: int


# ============================================================================
# Logic Agent
# ============================================================================

class LogicAgent(BaseAgent):
    """
    Agent that deduces safe cells before guessing.

    Strategy:
        1. Open on a corner (smallest neighborhood, most likely to cascade)
        2. Build one constraint per revealed number with hidden neighbors
        3. Propagate trivial constraints (all safe / all mines) to a fixpoint,
           using subset reduction between constraint pairs
        4. Without a certain move, pick the hidden cell with the lowest
           estimated mine probability
    """

    max_iterations = 100

    def __init__(self, bounds: Bounds, seed: Optional[int] = None) -> None:
        super().__init__(bounds)
        self.rng = np.random.default_rng(seed)
        self._first_move = True

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        valid_indices = np.flatnonzero(valid_actions)
        if len(valid_indices) == 0:
            return 0
        valid = set(valid_indices.tolist())

        if self._first_move:
            self._first_move = False
            return self._select_first_move(valid_indices)

        safe_cells, mine_cells = self.solve(observation)
        for c in sorted(safe_cells):
            action = self.position_to_action(c)
            if action in valid:
                return action

        return self._select_by_probability(observation, valid_indices, mine_cells)

    def reset(self) -> None:
        self._first_move = True

    def _select_first_move(self, valid_indices: np.ndarray) -> int:
        w, h, d = self.bounds
        corners = [
            self.position_to_action(Coordinate(x, y, z))
            for z in {0, d - 1}
            for y in {0, h - 1}
            for x in {0, w - 1}
        ]
        self.rng.shuffle(corners)
        for corner in corners:
            if corner in valid_indices:
                return int(corner)
        return int(self.rng.choice(valid_indices))

    # ========================================================================
    # Constraint Solving
    # ========================================================================

    def solve(
        self, observation: np.ndarray
    ) -> Tuple[Set[Coordinate], Set[Coordinate]]:
        """
        Find cells that are certainly safe or certainly mines.

        Returns:
            Tuple of (safe_cells, mine_cells).
        """
        safe_cells: Set[Coordinate] = set()
        mine_cells: Set[Coordinate] = set()
        constraints = self._build_constraints(observation)

        changed = True
        iterations = 0
        while changed and iterations < self.max_iterations:
            changed = False
            iterations += 1

            remaining: List[Constraint] = []
            for constraint in constraints:
                cells = constraint.cells - safe_cells - mine_cells
                mines = constraint.mine_count - len(constraint.cells & mine_cells)
                if not cells:
                    continue
                if mines == 0:
                    safe_cells |= cells
                    changed = True
                elif mines == len(cells):
                    mine_cells |= cells
                    changed = True
                else:
                    remaining.append(Constraint(frozenset(cells), mines))

            subset_safe, subset_mines, constraints = self._subset_reduction(remaining)
            if subset_safe - safe_cells or subset_mines - mine_cells:
                safe_cells |= subset_safe
                mine_cells |= subset_mines
                changed = True

        return safe_cells, mine_cells

    def _build_constraints(self, observation: np.ndarray) -> List[Constraint]:
        constraints = []
        for z, y, x in zip(*np.nonzero((observation > 0) & (observation < EXPLODED_OBSERVATION))):
            c = Coordinate(int(x), int(y), int(z))
            hidden, flagged = self._split_neighbors(observation, c)
            mines = int(observation[z, y, x]) - flagged
            if hidden and 0 <= mines <= len(hidden):
                constraints.append(Constraint(frozenset(hidden), mines))
        return constraints

    def _split_neighbors(
        self, observation: np.ndarray, c: Coordinate
    ) -> Tuple[Set[Coordinate], int]:
        """Hidden neighbors of c and the number of flagged ones."""
        hidden: Set[Coordinate] = set()
        flagged = 0
        for n in neighbors_of(c, self.bounds):
            value = observation[n.z, n.y, n.x]
            if value == HIDDEN_OBSERVATION:
                hidden.add(n)
            elif value == FLAGGED_OBSERVATION:
                flagged += 1
        return hidden, flagged

    def _subset_reduction(
        self, constraints: List[Constraint]
    ) -> Tuple[Set[Coordinate], Set[Coordinate], List[Constraint]]:
        """
        Derive new facts from pairs where one constraint contains the other.

        If A's cells are a strict subset of B's, then B - A holds
        B.mine_count - A.mine_count mines.
        """
        safe_cells: Set[Coordinate] = set()
        mine_cells: Set[Coordinate] = set()
        derived: List[Constraint] = []

        for i, first in enumerate(constraints):
            for second in constraints[i + 1:]:
                if first.cells < second.cells:
                    small, large = first, second
                elif second.cells < first.cells:
                    small, large = second, first
                else:
                    continue
                diff_cells = large.cells - small.cells
                diff_mines = large.mine_count - small.mine_count
                if diff_mines == 0:
                    safe_cells |= diff_cells
                elif diff_mines == len(diff_cells):
                    mine_cells |= diff_cells
                elif 0 < diff_mines < len(diff_cells):
                    derived.append(Constraint(diff_cells, diff_mines))

        # dict preserves order while dropping duplicates
        unique = list(dict.fromkeys(constraints + derived))
        return safe_cells, mine_cells, unique

    # ========================================================================
    # Guessing
    # ========================================================================

    def _select_by_probability(
        self,
        observation: np.ndarray,
        valid_indices: np.ndarray,
        known_mines: Set[Coordinate],
    ) -> int:
        probabilities = self._estimate_mine_probabilities(observation, known_mines)

        best_action = int(valid_indices[0])
        best_prob = 1.0
        for action in valid_indices.tolist():
            c = self.action_to_position(action)
            if c in known_mines:
                continue
            prob = probabilities.get(c, 0.5)
            if prob < best_prob:
                best_prob = prob
                best_action = action
        return best_action

    def _estimate_mine_probabilities(
        self,
        observation: np.ndarray,
        known_mines: Set[Coordinate],
    ) -> Dict[Coordinate, float]:
        """Per-cell mine probability, taking the most pessimistic constraint."""
        estimates: Dict[Coordinate, List[float]] = defaultdict(list)
        for constraint in self._build_constraints(observation):
            unknown = constraint.cells - known_mines
            remaining = constraint.mine_count - len(constraint.cells & known_mines)
            if not unknown or remaining < 0:
                continue
            prob = remaining / len(unknown)
            for c in unknown:
                estimates[c].append(prob)
        return {c: max(probs) for c, probs in estimates.items()}
