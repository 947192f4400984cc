#!filepath: tl_assistant/pipeline/steps.py
from __future__ import annotations

from dataclasses import replace

from tl_assistant import logs
from tl_assistant.observability.instrumentation import Instrumentation
from tl_assistant.pipeline.context import ConversionContext
from tl_assistant.pipeline.step import PipelineStep
from tl_assistant.timeline.engine import TimelineEngine
from tl_assistant.timeline.formatter import TimelineFormatter
from tl_assistant.timeline.parser import TimelineParser
from tl_assistant.timeline.radiator import RadiatorManager


class ParseStep(PipelineStep):
    """source_text -> rows"""

    def __init__(self, parser: TimelineParser, inst: Instrumentation | None = None):
        super().__init__(inst)
        self.parser = parser

    def run(self, ctx: ConversionContext) -> ConversionContext:
        with self.timed():
            with self.inst.timer("parse"):
                ctx.rows = self.parser.parse(ctx.source_text)

        self.inst.metrics.record("rows", len(ctx.rows))
        if not ctx.rows:
            logs.warning(f"[{self.step_name}] no rows parsed")
        return ctx


class SimulateStep(PipelineStep):
    """rows -> TimelineResult"""

    def __init__(self, engine: TimelineEngine, inst: Instrumentation | None = None):
        super().__init__(inst)
        self.engine = engine

    def run(self, ctx: ConversionContext) -> ConversionContext:
        with self.timed():
            with self.inst.timer("simulate"):
                ctx.result = self.engine.run(ctx.rows)

        self.inst.metrics.record("events", ctx.result.summary.n_events)
        self.inst.metrics.record("intervals", len(ctx.result.intervals))
        return ctx


class RadiatorStep(PipelineStep):
    """Attach radiator intervals, auto-extended to the end of the battle."""

    def __init__(self, manager: RadiatorManager, *, end_frame: int, inst: Instrumentation | None = None):
        super().__init__(inst)
        self.manager = manager
        self.end_frame = end_frame

    def run(self, ctx: ConversionContext) -> ConversionContext:
        if ctx.result is None:
            raise RuntimeError(f"[{self.step_name}] requires SimulateStep first")

        with self.timed():
            with self.inst.timer("radiator"):
                intervals = self.manager.scan(ctx.result.events, self.end_frame)

        ctx.result = replace(ctx.result, radiator=intervals)
        self.inst.metrics.record("radiator_intervals", len(intervals))
        return ctx


class FormatStep(PipelineStep):
    """TimelineResult -> text or JSON"""

    FORMATS = ("text", "json")

    def __init__(self, formatter: TimelineFormatter, *, fmt: str = "text", inst: Instrumentation | None = None):
        super().__init__(inst)
        if fmt not in self.FORMATS:
            raise ValueError(f"[FormatStep] unknown format: {fmt}")
        self.formatter = formatter
        self.fmt = fmt

    def run(self, ctx: ConversionContext) -> ConversionContext:
        if ctx.result is None:
            raise RuntimeError(f"[{self.step_name}] requires SimulateStep first")

        with self.timed():
            with self.inst.timer("format"):
                if self.fmt == "json":
                    ctx.rendered = self.formatter.to_json(ctx.result)
                else:
                    ctx.rendered = self.formatter.render(ctx.result)
        return ctx

