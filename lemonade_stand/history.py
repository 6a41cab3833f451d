# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""Append-only ledger of resolved days."""

from typing import Iterator, List, Optional

from .models import DayOutcome, HistoryStats


class HistoryLog:
    """
    Ordered record of every resolved day.

    Entries are only ever appended. `recent()` is a view computed on demand
    and never drops older days, so `summary()` always covers the whole game.
    """

    def __init__(self):
        self._entries: List[DayOutcome] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DayOutcome]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> DayOutcome:
        return self._entries[index]

    @property
    def last(self) -> Optional[DayOutcome]:
        return self._entries[-1] if self._entries else None

    def append(self, outcome: DayOutcome) -> None:
        self._entries.append(outcome)

    def entries(self) -> List[DayOutcome]:
        """Copy of all entries, oldest first."""
        return list(self._entries)

    def recent(self, n: int = 5) -> List[DayOutcome]:
        """The last `n` entries, newest first."""
        if n <= 0:
            return []
        return list(reversed(self._entries[-n:]))

    def summary(self) -> HistoryStats:
        """Aggregate statistics over every day played."""
        stats = HistoryStats()
        if not self._entries:
            return stats

        forecast_hits = 0
        for entry in self._entries:
            stats.days_played += 1
            stats.total_sales += entry.sales
            stats.total_revenue += entry.revenue
            stats.total_cost += entry.cost
            stats.total_profit += entry.profit
            if entry.profit < 0:
                stats.loss_days += 1
            if stats.best_profit is None or entry.profit > stats.best_profit:
                stats.best_profit = entry.profit
                stats.best_day = entry.day
            if entry.actual_weather_type == entry.forecast_type:
                forecast_hits += 1
            weather = entry.actual_weather_type.value
            stats.sales_by_weather[weather] = stats.sales_by_weather.get(weather, 0) + entry.sales

        stats.forecast_hit_rate = forecast_hits / stats.days_played
        return stats
