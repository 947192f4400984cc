from tl_assistant.observability.instrumentation import Instrumentation, NoOpInstrumentation
from tl_assistant.observability.metrics import MetricRecorder

__all__ = ["Instrumentation", "MetricRecorder", "NoOpInstrumentation"]
