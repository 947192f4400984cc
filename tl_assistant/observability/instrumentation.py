#!filepath: tl_assistant/observability/instrumentation.py
from __future__ import annotations

from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict

from tl_assistant.observability.metrics import MetricRecorder
from tl_assistant.observability.report import StepTimingReport
from tl_assistant.observability.timer import Timer


@dataclass
class Instrumentation:
    """
    Leaf-only timing plus run metrics.

    Rules:
    1. only record=True timers land in `timings`
    2. record=False timers mark a parent scope and leave no trace
    3. nothing here logs on the hot path; report() is the only output
    """

    enabled: bool = True

    def __post_init__(self):
        self._timer = Timer(enabled=self.enabled)
        self.metrics = MetricRecorder(enabled=self.enabled)
        self.timings: Dict[str, float] = OrderedDict()

    def timer(self, name: str, *, record: bool = True):
        inst = self

        @contextmanager
        def _span():
            if not inst.enabled:
                yield
                return

            inst._timer.start(name)
            try:
                yield
            finally:
                elapsed = inst._timer.stop(name)
                if record:
                    inst.timings[name] = elapsed

        return _span()

    def report(self, run_name: str) -> StepTimingReport:
        rep = StepTimingReport(self.timings, run_name)
        if self.enabled:
            rep.print()
        return rep


class NoOpInstrumentation:
    """Used when timing is switched off; same surface, no state."""

    def __init__(self):
        self.metrics = MetricRecorder(enabled=False)
        self.timings: Dict[str, float] = {}

    def timer(self, name: str, *, record: bool = True):
        return _NoOpSpan()

    def report(self, run_name: str) -> StepTimingReport:
        return StepTimingReport({}, run_name)


class _NoOpSpan:
    def __enter__(self):
        return None

    def __exit__(self, exc_type, exc, tb):
        return False
