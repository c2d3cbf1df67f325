"""Conversion between FAT date/time words and Unix timestamps."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod

__all__ = [
    "TimeProvider",
    "SystemTimeProvider",
    "fat_datetime_to_unix",
    "unix_to_fat_datetime",
]

_FAT_EPOCH_YEAR = 1980


def _pack_fat(t: time.struct_time) -> tuple[int, int]:
    fat_date = (
        ((t.tm_year - _FAT_EPOCH_YEAR) << 9) | (t.tm_mon << 5) | t.tm_mday
    ) & 0xFFFF
    fat_time = ((t.tm_hour << 11) | (t.tm_min << 5) | (t.tm_sec // 2)) & 0xFFFF
    return fat_date, fat_time


def fat_datetime_to_unix(fat_date: int, fat_time: int) -> int:
    """Convert a FAT date and time (local time) to a Unix timestamp.

    Returns 0 when both words are zero or the date cannot be represented.
    """
    if fat_date == 0 and fat_time == 0:
        return 0

    year = ((fat_date >> 9) & 0x7F) + _FAT_EPOCH_YEAR
    month = (fat_date >> 5) & 0x0F
    day = fat_date & 0x1F
    hour = (fat_time >> 11) & 0x1F
    minute = (fat_time >> 5) & 0x3F
    second = (fat_time & 0x1F) * 2

    try:
        ts = int(time.mktime((year, month, day, hour, minute, second, 0, 0, 0)))
    except (OverflowError, ValueError, OSError):
        return 0
    return ts & 0xFFFFFFFF if ts > 0 else 0


def unix_to_fat_datetime(timestamp: int) -> tuple[int, int]:
    """Convert a Unix timestamp to a ``(fat_date, fat_time)`` pair in local time.

    Returns ``(0, 0)`` when the timestamp cannot be converted.
    """
    try:
        t = time.localtime(timestamp)
    except (OverflowError, ValueError, OSError):
        return 0, 0
    return _pack_fat(t)


class TimeProvider(ABC):
    """Source of the current time in FAT format."""

    @abstractmethod
    def get_fat_time(self) -> tuple[int, int]:
        """Return the current ``(fat_date, fat_time)`` pair.

        Date: bits 0-4 day, 5-8 month, 9-15 years since 1980.
        Time: bits 0-4 seconds/2, 5-10 minutes, 11-15 hours.
        """


class SystemTimeProvider(TimeProvider):
    """Time provider backed by the system clock in local time."""

    def get_fat_time(self) -> tuple[int, int]:
        return unix_to_fat_datetime(int(time.time()))