"""
History Manager for PocketCalc
Keeps the bounded, newest-first log of past calculations
"""
import logging
from collections import namedtuple

import config
from number_formatter import format_number

logger = logging.getLogger(__name__)

HistoryEntry = namedtuple("HistoryEntry", ["expression", "result", "timestamp"])


class HistoryLog:
    def __init__(self, capacity=config.MAX_HISTORY_ITEMS):
        self.capacity = capacity
        self._entries = []

    def __len__(self):
        return len(self._entries)

    def record(self, expression, result, now):
        """Add a calculation to the head of the log, dropping the oldest past capacity"""
        self._entries.insert(0, HistoryEntry(expression, result, int(now)))
        del self._entries[self.capacity:]

    def clear(self):
        """Clear all calculation history"""
        self._entries = []

    def entries(self):
        """Snapshot of the log, newest first"""
        return tuple(self._entries)

    def to_list(self):
        """History as plain dicts, for saving"""
        return [dict(entry._asdict()) for entry in self._entries]

    def load(self, items):
        """Replace the log with saved entries (newest first).

        Items missing a field are skipped; anything beyond capacity is dropped.
        """
        entries = []
        for item in items:
            try:
                entry = HistoryEntry(str(item["expression"]), str(item["result"]),
                                     int(item["timestamp"]))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed history item: %r", item)
                continue
            entries.append(entry)
        self._entries = entries[:self.capacity]

    def format_entries(self):
        """Format calculation history for display"""
        return [f"{entry.expression} = {format_number(entry.result)}"
                for entry in self._entries]
