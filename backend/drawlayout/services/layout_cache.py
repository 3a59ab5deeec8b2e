"""
Caller-side memo for draw layouts.

Keyed by a SHA-256 of the canonical draw content + layout constants +
stage, so any change to the match list yields a new key. Bounded LRU;
safe to share across request threads.
"""

import hashlib
import json
import logging
import os
import threading
from collections import OrderedDict
from dataclasses import asdict
from typing import Optional

from drawlayout.services.draw_layout import DrawLayout, build_draw_layout
from drawlayout.services.draw_types import DrawInput
from drawlayout.services.layout_constants import LayoutConstants

logger = logging.getLogger(__name__)


def layout_cache_key(draw: DrawInput, constants: LayoutConstants, stage: Optional[str] = None) -> str:
    payload = json.dumps(
        {
            "draw_id": draw.draw_id,
            "draw_size": draw.draw_size,
            "draw_type": draw.draw_type,
            "event_type": draw.event_type,
            "matches": [asdict(m) for m in draw.matches],
            "constants": asdict(constants),
            "stage": stage,
        },
        sort_keys=True,
        default=str,
    )
    return hashlib.sha256(payload.encode()).hexdigest()


class LayoutCache:
    def __init__(self, maxsize: int = 128):
        self.maxsize = maxsize
        self._entries: "OrderedDict[str, DrawLayout]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_compute(
        self,
        draw: DrawInput,
        constants: LayoutConstants,
        stage: Optional[str] = None,
    ) -> DrawLayout:
        key = layout_cache_key(draw, constants, stage)
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                return cached

        layout = build_draw_layout(draw, constants, stage=stage)

        with self._lock:
            self.misses += 1
            if self.maxsize <= 0:
                return layout
            self._entries[key] = layout
            self._entries.move_to_end(key)
            while len(self._entries) > self.maxsize:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Layout cache evicted %s", evicted[:16])
        return layout

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0


_layout_cache = LayoutCache(maxsize=int(os.getenv("LAYOUT_CACHE_SIZE", "128")))


def get_layout_cache() -> LayoutCache:
    """FastAPI dependency returning the process-wide layout cache."""
    return _layout_cache
