#!filepath: tl_assistant/timeline/engine.py
from __future__ import annotations

from typing import Optional, Sequence

from tl_assistant import logs
from tl_assistant.config.simulation_config import SimulationConfig
from tl_assistant.timeline.buffs.catalog import BuffCatalog
from tl_assistant.timeline.buffs.lifecycle import BuffLifecycleManager
from tl_assistant.timeline.buffs.special import SpecialCommandInterpreter
from tl_assistant.timeline.core.events import ActionRow
from tl_assistant.timeline.core.state import ResourceAccrual
from tl_assistant.timeline.core.time import frames_to_seconds, units_to_points
from tl_assistant.timeline.labels import LabelResolver
from tl_assistant.timeline.rate import AccrualRateCalculator
from tl_assistant.timeline.result import RunSummary, TimelineResult
from tl_assistant.timeline.scheduler import EventMergeScheduler


class TimelineEngine:
    """
    TimelineEngine (FROZEN)

    One run = fresh state + bootstrap + every row through the scheduler.

    Catalog and config are injected here and nowhere else; the engine
    itself keeps no state between runs.
    """

    def __init__(self, config: Optional[SimulationConfig] = None, catalog: Optional[BuffCatalog] = None):
        self.config = config or SimulationConfig()
        self.catalog = catalog or BuffCatalog.load(self.config.catalog_path)
        self._rate = AccrualRateCalculator(
            base_rate=self.config.base_rate,
            factor=self.config.amplifier_factor,
        )

    def run(self, rows: Sequence[ActionRow]) -> TimelineResult:
        cfg = self.config

        buffs = BuffLifecycleManager(duration_variants=cfg.duration_variants)
        accrual = ResourceAccrual(
            ceiling_points=units_to_points(cfg.resource_ceiling),
            rate_fn=lambda frame, participants: self._rate.rate(buffs.active_at(frame), participants),
            accrue_before_consume=cfg.accrue_before_consume,
        )
        labels = LabelResolver.from_rows(
            rows,
            offset_always_forward=cfg.offset_always_forward,
            countdown_display=cfg.countdown_display,
        )
        special = SpecialCommandInterpreter(
            enabled=cfg.special_commands_enabled,
            template=self.catalog.template,
        )

        scheduler = EventMergeScheduler(
            config=cfg,
            catalog=self.catalog,
            accrual=accrual,
            buffs=buffs,
            labels=labels,
            special=special,
        )

        scheduler.bootstrap()
        for i, row in enumerate(rows):
            scheduler.resolve_row(row, i)

        events = scheduler.events
        summary = RunSummary(
            final_frame=accrual.frame,
            final_points=accrual.points,
            final_level=accrual.level,
            elapsed_seconds=frames_to_seconds(accrual.frame),
            total_overflow=sum(e.overflow for e in events),
            n_rows=len(rows),
            n_events=len(events),
        )

        logs.info(
            f"[Engine] {summary.n_rows} rows -> {summary.n_events} events, "
            f"final level {summary.final_level:.2f} at frame {summary.final_frame}"
        )

        return TimelineResult(
            events=events,
            intervals=buffs.intervals,
            summary=summary,
            labels=labels.published,
        )
