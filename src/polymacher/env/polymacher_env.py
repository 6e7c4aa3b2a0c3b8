from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from polymacher.game import Action, GameConfig, LevelData, PolymacherGame, can_move
from polymacher.game.core import ACTION_VECTORS


def _compute_action_mask(game: PolymacherGame) -> np.ndarray:
    mask = np.zeros((len(Action),), dtype=np.bool_)
    if not game.is_playing:
        return mask
    for action, (dx, dy) in ACTION_VECTORS.items():
        mask[int(action)] = can_move(game.board, dx, dy)
    mask[int(Action.RESET)] = True
    return mask


_PALETTE = {
    "floor": (236, 236, 236),
    "wall": (128, 128, 128),
    "goal": (240, 220, 40),
    "inert": (200, 60, 60),
    "poly": (230, 0, 0),
}


class PolymacherEnv(gym.Env):
    """One Polymacher level per episode.

    Observation is the board's (4, H, W) occupancy stack. An episode ends
    when the level is solved; the session's win delay is never waited on.
    """

    metadata = {"render_modes": ["ansi", "rgb_array"], "render_fps": 30}

    def __init__(
        self,
        level: int = 0,
        levels: Optional[Sequence[LevelData]] = None,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        solve_reward: float = 1.0,
        invalid_action_penalty: float = -0.05,
        step_penalty: float = -0.01,
        max_episode_steps: int = 200,
    ) -> None:
        super().__init__()
        self.config = replace(config or GameConfig(), start_level=int(level))
        self.game = PolymacherGame(self.config, levels=levels)
        self.level = int(level)
        self.render_mode = render_mode

        self.solve_reward = float(solve_reward)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.config.height, self.config.width
        self.observation_space = spaces.Box(low=0, high=1, shape=(4, h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))
        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.board.occupancy()

    def _get_info(self) -> Dict[str, Any]:
        info: Dict[str, Any] = {
            "action_mask": _compute_action_mask(self.game),
            "steps": self._steps,
        }
        info.update(self.game.get_state())
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if options and "level" in options:
            self.level = int(options["level"])
        self.game.load_level(self.level)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = Action(int(action))
        reward = self.step_penalty
        absorbed = False

        was_playing = self.game.is_playing
        outcome = self.game.step(action)
        if outcome is not None:
            if outcome.rejected:
                reward += self.invalid_action_penalty
            absorbed = outcome.absorbed_any

        self._steps += 1
        terminated = not self.game.is_playing
        if was_playing and terminated:
            reward += self.solve_reward
        truncated = not terminated and self._steps >= self.max_episode_steps

        info = self._get_info()
        info["absorbed"] = absorbed
        return self._get_obs(), float(reward), terminated, truncated, info

    def render(self):
        if self.render_mode == "ansi":
            return self.game.board.render_text()
        if self.render_mode == "rgb_array":
            layers = self._get_obs()
            cell = 12
            _, h, w = layers.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    if layers[3, y, x]:
                        color = _PALETTE["poly"]
                    elif layers[2, y, x]:
                        color = _PALETTE["inert"]
                    elif layers[1, y, x]:
                        color = _PALETTE["goal"]
                    elif layers[0, y, x]:
                        color = _PALETTE["wall"]
                    else:
                        color = _PALETTE["floor"]
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
