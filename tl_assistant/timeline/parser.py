#!filepath: tl_assistant/timeline/parser.py
from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import List, Optional

from tl_assistant import logs
from tl_assistant.config.parser_config import NumberInterpretation, ParserConfig
from tl_assistant.config.simulation_config import SimulationConfig
from tl_assistant.timeline.core.events import (
    AbsoluteAnchor,
    ActionRow,
    Anchor,
    LabelAnchor,
    TargetLevelAnchor,
)
from tl_assistant.timeline.core.time import parse_clock

REFERENCE_RE = re.compile(r"^#([^+\-\s]*)")
BEGINNING_RE = re.compile(r"^(?:AUTO|[0-9\s\[\]:.+\-])*", re.IGNORECASE)
NAME_RE = re.compile(r"^[^\[\s#⟨<]*")
LABEL_RE = re.compile(r"#([^\s\[⟨<]*)")
BRACKET_RE = re.compile(r"\[([^\]]*)\]")
SURROUNDED_RE = re.compile(r"^[\[⟨<]([^\]⟩>]+)[\]⟩>]$")
NUMERIC_TOKEN_RE = re.compile(r"^[\d\-.\[\]⟨⟩<>()秒sS]*$")
SECONDS_RE = re.compile(r"^(.*?)(?:秒|s|S)")
LEADING_FLOAT_RE = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)")

COMMENT_PREFIX = "!"


def _leading_float(text: str) -> Optional[float]:
    m = LEADING_FLOAT_RE.match(text or "")
    return float(m.group(0)) if m else None


def normalize_line(line: str) -> str:
    """Full-width -> half-width, whitespace collapsed, trimmed."""
    text = unicodedata.normalize("NFKC", line)
    return " ".join(text.split())


@dataclass
class _Beginning:
    time: Optional[float] = None
    target_level: Optional[float] = None
    explicit_level: bool = False
    sign: Optional[str] = None
    offset: Optional[float] = None
    auto: bool = False


@dataclass
class _Ending:
    label: Optional[str] = None
    cost: Optional[float] = None
    value: Optional[float] = None
    duration: Optional[float] = None
    target: Optional[str] = None


class TimelineParser:
    """
    Raw timeline text -> ActionRows.

    Line layout:
        [#ref[+|-offset]] [AUTO] [time | [level] | number] Name [#label] [cost] [Ns] [target]

    Anchor priority per row: time > label reference > target level.
    Lines with no action name are skipped.
    """

    def __init__(self, config: Optional[ParserConfig] = None, simulation: Optional[SimulationConfig] = None):
        self.config = config or ParserConfig()
        self.simulation = simulation or SimulationConfig()

    def parse(self, text: str) -> List[ActionRow]:
        lines = text.splitlines()
        rows: List[ActionRow] = []
        for raw in lines:
            row = self.parse_line(raw)
            if row is None:
                continue
            rows.append(row)

        logs.debug(f"[Parser] {len(rows)} rows from {len(lines)} lines")
        return rows

    def parse_line(self, raw: str) -> Optional[ActionRow]:
        line = normalize_line(raw)
        if not line or line.startswith(COMMENT_PREFIX):
            return None

        reference = None
        m = REFERENCE_RE.match(line)
        if m:
            reference = "#" + m.group(1)
            line = line[len(reference):]

        beginning = BEGINNING_RE.match(line).group(0)
        rest = line[len(beginning):]
        name = NAME_RE.match(rest).group(0)
        ending = rest[len(name):]

        if not name:
            logs.debug(f"[Parser] skipped (no action name): {raw!r}")
            return None

        b = self._parse_beginning(beginning, reference)
        e = self._parse_ending(ending)

        return ActionRow(
            name=name,
            anchor=self._anchor(b, e, reference),
            cost=e.cost or 0.0,
            label=e.label,
            value=e.value,
            duration=e.duration,
            target=e.target,
            auto=b.auto,
            source_line=raw,
        )

    # --------------------------------------------------
    def _anchor(self, b: _Beginning, e: _Ending, reference: Optional[str]) -> Optional[Anchor]:
        if b.time is not None:
            return AbsoluteAnchor.at_seconds(self._elapsed(b.time))
        if reference:
            return LabelAnchor(label=reference, sign=b.sign, offset_seconds=b.offset)
        if b.target_level is not None:
            return TargetLevelAnchor(level=b.target_level, explicit=b.explicit_level)
        if e.cost is not None:
            return TargetLevelAnchor(level=e.cost, explicit=False)
        return None

    def _elapsed(self, shown: float) -> float:
        if self.simulation.countdown_display:
            return self.simulation.battle_duration - shown
        return shown

    def _parse_beginning(self, text: str, reference: Optional[str]) -> _Beginning:
        out = _Beginning()
        if not text:
            return out

        if "AUTO" in text.upper():
            out.auto = True
            text = re.sub("AUTO", "", text, flags=re.IGNORECASE).strip()

        if reference:
            if "+" in text:
                out.sign = "+"
                text = text.replace("+", "", 1)
            elif "-" in text:
                out.sign = "-"
                text = text.replace("-", "", 1)
            tokens = text.split()
            if tokens:
                out.offset = parse_clock(tokens[0])
            return out

        tokens = text.replace("[", " [").split()
        if not tokens:
            return out

        first = tokens[0]
        bracket = BRACKET_RE.search(first)
        if bracket:
            level = _leading_float(bracket.group(1))
            if level is not None:
                out.target_level = level
                out.explicit_level = True
        elif ":" in first or self.config.number_interpretation is NumberInterpretation.TIME:
            out.time = parse_clock(first)
        else:
            out.target_level = _leading_float(first)
        return out

    def _parse_ending(self, text: str) -> _Ending:
        out = _Ending()
        if not text:
            return out

        m = LABEL_RE.search(text)
        if m:
            out.label = m.group(0)
            text = text.replace(m.group(0), "", 1)

        for token in text.split():
            if out.target is None and not NUMERIC_TOKEN_RE.match(token):
                out.target = token
                continue

            number = token
            surrounded = SURROUNDED_RE.match(token)
            if surrounded:
                number = surrounded.group(1)

            seconds = SECONDS_RE.match(number)
            if seconds:
                number = seconds.group(1)

            value = _leading_float(number)
            if value is None:
                continue

            if seconds:
                if out.duration is None:
                    out.duration = value
            elif surrounded:
                if out.cost is None:
                    out.cost = value
            else:
                if out.cost is None:
                    out.cost = value
                if out.value is None:
                    out.value = value
        return out
