#!filepath: tl_assistant/pipeline/pipeline.py
from __future__ import annotations

from typing import List

from tl_assistant import logs
from tl_assistant.observability.instrumentation import Instrumentation, NoOpInstrumentation
from tl_assistant.pipeline.context import ConversionContext
from tl_assistant.pipeline.step import PipelineStep


class ConversionPipeline:
    """
    ConversionPipeline = orchestration only.

    - runs steps in order over one ConversionContext
    - does no timing of its own; steps time their leaves
    - prints the timing report at the end
    """

    def __init__(self, steps: List[PipelineStep], inst: Instrumentation | None = None):
        self.steps = steps
        self.inst = inst if inst is not None else NoOpInstrumentation()

    def run(self, source_text: str, run_name: str = "timeline") -> ConversionContext:
        logs.info(f"[Pipeline] ====== START {run_name} ======")

        ctx = ConversionContext(run_name=run_name, source_text=source_text)
        for step in self.steps:
            ctx = step.run(ctx)

        self.inst.report(run_name)
        logs.info(f"[Pipeline] ====== DONE {run_name} ======")
        return ctx
