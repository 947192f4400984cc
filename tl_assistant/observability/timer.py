#!filepath: tl_assistant/observability/timer.py
import time
from typing import Dict


class Timer:
    """
    Named wall-clock spans.

    start(name) / stop(name) -> seconds; stopping an unknown name gives 0.0
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._open: Dict[str, float] = {}

    def start(self, name: str) -> None:
        if self.enabled:
            self._open[name] = time.perf_counter()

    def stop(self, name: str) -> float:
        if not self.enabled:
            return 0.0
        began = self._open.pop(name, None)
        if began is None:
            return 0.0
        return time.perf_counter() - began
