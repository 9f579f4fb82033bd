"""Gymnasium-compatible wrapper around :class:`~blockfall.engine.GameEngine`.

Each step issues one player command and then advances the gravity clock by
``frame_ms``, so an agent plays against real gravity timing.

Observation is a flat ``float32`` vector:
  - board with the active piece overlaid, as occupancy (20x10=200)
  - next piece one-hot (7)

Reward is the score gained during the step.  The episode terminates on game
over and is truncated after ``max_steps`` when set.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import HEIGHT, WIDTH
from .engine import GameEngine, GameSnapshot, GameStatus
from .render import compose_grid, render_ascii
from .shapes import PieceKind

KINDS = list(PieceKind)
OBS_SIZE = HEIGHT * WIDTH + len(KINDS)


class Action(IntEnum):
    NOOP = 0
    LEFT = 1
    RIGHT = 2
    ROTATE = 3
    SOFT_DROP = 4
    HARD_DROP = 5


class BlockfallEnv(gym.Env):
    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 60,
    }

    def __init__(
        self,
        *,
        frame_ms: float = 1000 / 60,
        max_steps: Optional[int] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render mode: {render_mode}")
        self.render_mode = render_mode
        self.frame_ms = frame_ms
        self._max_steps = max_steps
        self._steps = 0
        self.engine = GameEngine()
        self.action_space = spaces.Discrete(len(Action))
        self.observation_space = spaces.Box(low=0.0, high=1.0, shape=(OBS_SIZE,), dtype=np.float32)

    # ----------------------- Env API -----------------------
    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        # Piece selection follows the env's seeded generator.
        self.engine = GameEngine(seed=int(self.np_random.integers(2**32)))
        self.engine.start()
        self._steps = 0
        snapshot = self.engine.snapshot()
        return self._observation(snapshot), self._info(snapshot)

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action}")
        score_before = self.engine.score
        command = Action(int(action))
        if command is Action.LEFT:
            self.engine.move_left()
        elif command is Action.RIGHT:
            self.engine.move_right()
        elif command is Action.ROTATE:
            self.engine.rotate()
        elif command is Action.SOFT_DROP:
            self.engine.soft_drop()
        elif command is Action.HARD_DROP:
            self.engine.hard_drop()
        self.engine.tick(self.frame_ms)
        self._steps += 1

        snapshot = self.engine.snapshot()
        reward = float(snapshot.score - score_before)
        terminated = snapshot.status is GameStatus.GAME_OVER
        truncated = self._max_steps is not None and self._steps >= self._max_steps
        return self._observation(snapshot), reward, terminated, truncated, self._info(snapshot)

    def render(self):
        if self.render_mode == "ansi":
            return render_ascii(self.engine.snapshot())
        return None

    def close(self):
        return None

    # -------------------- Helpers -------------------------
    def _observation(self, snapshot: GameSnapshot) -> np.ndarray:
        grid = np.array(compose_grid(snapshot, ghost=False), dtype=np.float32)
        board = (grid > 0).astype(np.float32).reshape(-1)
        upcoming = np.zeros((len(KINDS),), dtype=np.float32)
        if snapshot.next_piece is not None:
            upcoming[KINDS.index(snapshot.next_piece.kind)] = 1.0
        return np.concatenate([board, upcoming], dtype=np.float32)

    def _info(self, snapshot: GameSnapshot) -> Dict[str, Any]:
        return {
            "score": snapshot.score,
            "level": snapshot.level,
            "lines": snapshot.lines,
        }


__all__ = ["Action", "BlockfallEnv"]
