from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field


class SimulationConfig(BaseModel):
    """
    SimulationConfig (READ-ONLY during a run)

    Semantics:
      - everything the engine needs besides rows and catalog
      - injected once at engine creation, never mutated
    """

    # resource pool
    resource_ceiling: float = Field(10.0, gt=0)
    base_rate: int = Field(700, ge=0)
    participants: int = Field(6, ge=0)

    # battle clock (seconds / frames)
    battle_duration: int = Field(180, gt=0)
    battle_start_frame: int = Field(60, ge=0)

    # global amplifier (flat percentage on every per-participant rate)
    amplifier_enabled: bool = False
    amplifier_percent: float = 20.29

    # inline "cost recovery up/down" directives
    special_commands_enabled: bool = False

    # label offset sign policy
    offset_always_forward: bool = False
    countdown_display: bool = True

    # catalog id -> use the second duration variant
    duration_variants: Dict[str, bool] = Field(default_factory=lambda: {"seia": True})

    # grant selector -> stacking level (0 = off)
    grant_levels: Dict[str, int] = Field(default_factory=dict)

    # commit order inside one frame
    accrue_before_consume: bool = True

    max_merge_iterations: int = Field(100, gt=0)

    # optional catalog override
    catalog_path: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def amplifier_factor(self) -> float:
        return 1.0 + self.amplifier_percent / 100.0 if self.amplifier_enabled else 1.0

    def grant_level(self, selector: str) -> int:
        return int(self.grant_levels.get(selector, 0))

    def use_second_variant(self, entry_id: str) -> bool:
        return bool(self.duration_variants.get(entry_id, False))
