"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ToolId and ItemId are opaque strings (legacy client data uses nanoid strings)
    - Timestamps are epoch milliseconds (EpochMillis), never datetimes, inside core
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Clock / IdFactory / UniformSource are plain callables so tests inject fixed sequences
"""

import random
import time
import uuid
from enum import Enum
from typing import Callable, NewType


# ─── Identity Types ──────────────────────────────────────────────

ToolId = NewType("ToolId", str)
ItemId = NewType("ItemId", str)


# ─── Value Types ─────────────────────────────────────────────────

EpochMillis = NewType("EpochMillis", int)


# ─── Enums ───────────────────────────────────────────────────────

class SourceType(str, Enum):
    """Discriminator for the two candidate-source shapes."""
    LIST = "list"
    RANGE = "range"


class DrawingType(str, Enum):
    """Presentation metaphors a UI may use for a source."""
    WHEEL = "wheel"
    SLOT = "slot"
    CARDS = "cards"
    SIMPLE = "simple"


# ─── Injected capabilities ───────────────────────────────────────

UniformSource = Callable[[], float]   # uniform over [0, 1)
Clock = Callable[[], int]             # epoch milliseconds
IdFactory = Callable[[], str]


def epoch_millis() -> EpochMillis:
    return EpochMillis(time.time_ns() // 1_000_000)


def new_id() -> str:
    return uuid.uuid4().hex


default_uniform: UniformSource = random.random
