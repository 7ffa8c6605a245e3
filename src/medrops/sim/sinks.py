"""Visualization sinks that observe rollouts without affecting them."""

from typing import List, Tuple

import numpy as np


class TrajectoryRecorder:
    """Keeps a copy of every (state, action, reward) step it is shown."""

    def __init__(self):
        self.steps: List[Tuple[np.ndarray, np.ndarray, float]] = []

    def on_step(self, state: np.ndarray, action: np.ndarray, reward: float) -> None:
        self.steps.append((np.array(state, dtype=np.float64), np.array(action, dtype=np.float64), float(reward)))

    def states(self) -> np.ndarray:
        return np.asarray([s for s, _, _ in self.steps], dtype=np.float64)

    def rewards(self) -> np.ndarray:
        return np.asarray([r for _, _, r in self.steps], dtype=np.float64)

    def __len__(self) -> int:
        return len(self.steps)
