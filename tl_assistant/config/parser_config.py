# tl_assistant/config/parser_config.py
from enum import Enum

from pydantic import BaseModel


class NumberInterpretation(str, Enum):
    COST = "cost"
    TIME = "time"


class ParserConfig(BaseModel):
    # a bare leading number ("5 Name") is a target level or a time
    number_interpretation: NumberInterpretation = NumberInterpretation.COST


class RadiatorConfig(BaseModel):
    marker_pattern: str = r"ラジエータ|過負荷|radiator|overload"
    start_pattern: str = r"(ラジエータ|過負荷|radiator|overload).*([始起]|start|begin)"
    end_pattern: str = r"(ラジエータ|過負荷|radiator|overload).*([終了停止]|end|stop)"
