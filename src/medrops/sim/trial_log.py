"""
medrops SIM: TRIAL LOG
----------------------
Append-only record of (policy parameters, total real reward) pairs.

Entries are written by real-world rollouts only, one after another, and are
kept for the lifetime of the log object in execution order. The log is handed
to the rollout explicitly; there is no module-level instance.
"""

import math
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

import numpy as np

from medrops.exceptions import ValidationError
from medrops.logging import get_logger

logger = get_logger("trial_log")


@dataclass(frozen=True)
class TrialEntry:
    """Parameters of a non-exploratory policy and the reward it collected."""

    parameters: np.ndarray
    reward: float

    def to_dict(self) -> Dict[str, Any]:
        return {"parameters": self.parameters.tolist(), "reward": float(self.reward)}


class TrialLog:
    """Unbounded, insertion-ordered trial history."""

    def __init__(self):
        self._entries: List[TrialEntry] = []
        self._lock = threading.Lock()

    def append(self, parameters: Any, reward: float) -> TrialEntry:
        params = np.array(parameters, dtype=np.float64, copy=True).reshape(-1)
        params.setflags(write=False)
        reward = float(reward)
        if not math.isfinite(reward):
            raise ValidationError("Trial reward must be finite", details={"reward": reward})

        entry = TrialEntry(parameters=params, reward=reward)
        with self._lock:
            self._entries.append(entry)
            index = len(self._entries) - 1
        logger.debug("Recorded trial {index}: reward={reward:.4f}", index=index, reward=reward)
        return entry

    @property
    def entries(self) -> List[TrialEntry]:
        """Snapshot of all entries in insertion order."""
        with self._lock:
            return list(self._entries)

    def rewards(self) -> np.ndarray:
        return np.asarray([e.reward for e in self.entries], dtype=np.float64)

    def best(self) -> Optional[TrialEntry]:
        """Entry with the highest reward (earliest on ties), or None when empty."""
        entries = self.entries
        if not entries:
            return None
        return max(entries, key=lambda e: e.reward)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[TrialEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> TrialEntry:
        with self._lock:
            return self._entries[index]
