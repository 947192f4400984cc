#!filepath: tl_assistant/workflows/conversion.py
from __future__ import annotations

from typing import Optional

from tl_assistant.config.app_config import AppConfig
from tl_assistant.observability.instrumentation import Instrumentation, NoOpInstrumentation
from tl_assistant.pipeline.pipeline import ConversionPipeline
from tl_assistant.pipeline.steps import FormatStep, ParseStep, RadiatorStep, SimulateStep
from tl_assistant.timeline.buffs.catalog import BuffCatalog
from tl_assistant.timeline.core.time import FPS
from tl_assistant.timeline.engine import TimelineEngine
from tl_assistant.timeline.formatter import TimelineFormatter
from tl_assistant.timeline.parser import TimelineParser
from tl_assistant.timeline.radiator import RadiatorManager


def build_conversion_pipeline(
    cfg: Optional[AppConfig] = None,
    *,
    catalog: Optional[BuffCatalog] = None,
    fmt: str = "text",
    rows_only: bool = False,
    timing: bool = True,
) -> ConversionPipeline:
    """
    Timeline conversion pipeline (FINAL)

    Semantic order:
        Parse      (text -> ActionRows)
        -> Simulate  (rows -> resolved events + interval audit)
        -> Radiator  (marker pairs over the resolved stream)
        -> Format    (text / JSON)
    """
    cfg = cfg or AppConfig.load()
    sim = cfg.simulation
    catalog = catalog or BuffCatalog.load(sim.catalog_path)
    inst = Instrumentation() if timing else NoOpInstrumentation()

    steps = [
        ParseStep(TimelineParser(cfg.parser, sim), inst=inst),
        SimulateStep(TimelineEngine(sim, catalog), inst=inst),
        RadiatorStep(RadiatorManager(cfg.radiator), end_frame=sim.battle_duration * FPS, inst=inst),
        FormatStep(
            TimelineFormatter(
                battle_duration=sim.battle_duration,
                countdown=sim.countdown_display,
                rows_only=rows_only,
            ),
            fmt=fmt,
            inst=inst,
        ),
    ]
    return ConversionPipeline(steps, inst)
