#!filepath: tl_assistant/pipeline/step.py
from __future__ import annotations

from tl_assistant.observability.instrumentation import Instrumentation, NoOpInstrumentation
from tl_assistant.pipeline.context import ConversionContext


class PipelineStep:
    """
    Pipeline step base class.

    A step orchestrates one stage and marks its wall-time boundary with
    timed() (parent scope, not recorded). Leaf work inside run() uses
    self.inst.timer(...). Behaviour never depends on whether inst is real.
    """

    def __init__(self, inst: Instrumentation | None = None):
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )

    @property
    def step_name(self) -> str:
        return self.__class__.__name__

    def timed(self):
        return self.inst.timer(self.step_name, record=False)

    def run(self, ctx: ConversionContext) -> ConversionContext:
        raise NotImplementedError
