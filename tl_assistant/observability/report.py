#!filepath: tl_assistant/observability/report.py
from typing import Dict, Mapping

from tl_assistant import logs


class StepTimingReport:
    """step name -> seconds, printed through logs once per run."""

    WIDTH = 28

    def __init__(self, timings: Mapping[str, float], run_name: str):
        self.timings: Dict[str, float] = dict(timings)
        self.run_name = run_name

    @property
    def total(self) -> float:
        return sum(self.timings.values())

    def lines(self):
        yield f"[Timing] ===== {self.run_name} ====="
        for name, sec in self.timings.items():
            yield f"[Timing] {name:<{self.WIDTH}} {sec:>8.4f}s"
        yield f"[Timing] {'total':<{self.WIDTH}} {self.total:>8.4f}s"

    def print(self) -> None:
        for line in self.lines():
            logs.info(line)
