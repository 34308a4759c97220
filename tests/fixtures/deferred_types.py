"""Record types whose annotations are only partly resolvable at runtime."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from decimal import Decimal


@dataclass
class Price:
    amount: Decimal = field(default=None, metadata={"json": "amount"})
    currency: str = field(default="", metadata={"json": "currency"})
    history: list[int] = field(default_factory=list, metadata={"json": "history"})
    previous: Optional[Price] = field(default=None, metadata={"json": "previous"})
