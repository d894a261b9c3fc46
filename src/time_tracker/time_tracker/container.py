from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .common.datetime_utils import Clock, now_local
from .core.constants import WORK_DAY_HOURS
from .presence.calculator import PresenceCalculator
from .reports.service import PeriodAggregator


@dataclass(frozen=True)
class Container:
    clock: Clock

    presence_calculator: PresenceCalculator
    period_aggregator: PeriodAggregator


def build_container(*, work_day_hours: float = WORK_DAY_HOURS, clock: Optional[Clock] = None) -> Container:
    clock = clock or now_local

    presence_calculator = PresenceCalculator(clock, work_day_hours=work_day_hours)
    period_aggregator = PeriodAggregator(presence_calculator)

    return Container(
        clock=clock,
        presence_calculator=presence_calculator,
        period_aggregator=period_aggregator,
    )
