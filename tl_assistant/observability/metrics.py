#!filepath: tl_assistant/observability/metrics.py
from dataclasses import dataclass, field
from typing import Any, Dict

from tl_assistant import logs


@dataclass
class MetricRecorder:
    """Run-level counters (rows parsed, events committed, intervals created)."""

    enabled: bool = True
    values: Dict[str, Any] = field(default_factory=dict)

    def record(self, name: str, value: Any) -> None:
        if not self.enabled:
            return
        self.values[name] = value
        logs.debug(f"[Metric] {name} = {value}")

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)
