# clock_reading.py

import datetime
from typing import NamedTuple


class ClockReading(NamedTuple):
    """Wall-clock time sampled once per frame."""
    hour_of_day: int  # 0-23
    minute: int  # 0-59
    second: int  # 0-59
    millisecond: int = 0  # 0-999

    @property
    def hour(self) -> int:
        """Hour on the 12-hour dial, 0-11 (0 is twelve o'clock)."""
        return self.hour_of_day % 12

    @property
    def smooth_seconds(self) -> float:
        return self.second + self.millisecond / 1000.0

    @classmethod
    def from_datetime(cls, moment: datetime.datetime) -> "ClockReading":
        return cls(moment.hour, moment.minute, moment.second, moment.microsecond // 1000)

    @classmethod
    def now(cls) -> "ClockReading":
        return cls.from_datetime(datetime.datetime.now())
