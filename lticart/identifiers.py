#!/usr/bin/env python3
"""
# LtiCart
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

identifiers.py

Identifier allocation for manifest items, resources and the manifest itself.

Two strategies:
- monotonic: I_100, I_101, ... (reproducible builds)
- random:    I_3F2A9C0D11B24E7A (unique across independent builds)

An allocator is owned by one generation call. It is reset at the start of
the call and must not be shared between concurrent calls.
"""

from __future__ import annotations

import uuid
from typing import Dict, List

from lticart.errors import unknown_strategy_error


ITEM_PREFIX = "I_"
MANIFEST_PREFIX = "M_"
ORGANIZATION_PREFIX = "O_"
RESOURCE_SUFFIX = "_R"

COUNTER_BASE = 100
TOKEN_LENGTH = 16


class IdentifierAllocator:
    """Base class for identifier strategies."""

    name = "base"

    def next(self, prefix: str = ITEM_PREFIX, suffix: str = "") -> str:
        return f"{prefix}{self._token()}{suffix}"

    def reset(self) -> None:
        pass

    def _token(self) -> str:
        raise NotImplementedError


class MonotonicAllocator(IdentifierAllocator):
    """Counter starting at 100, one step per identifier."""

    name = "monotonic"

    def __init__(self, base: int = COUNTER_BASE):
        self.base = base
        self._counter = base

    def reset(self) -> None:
        self._counter = self.base

    def _token(self) -> str:
        value = self._counter
        self._counter += 1
        return str(value)


class RandomAllocator(IdentifierAllocator):
    """Upper-case hex token cut from a uuid4."""

    name = "random"

    def _token(self) -> str:
        return uuid.uuid4().hex[:TOKEN_LENGTH].upper()


STRATEGIES: Dict[str, type] = {
    MonotonicAllocator.name: MonotonicAllocator,
    RandomAllocator.name: RandomAllocator,
}


def strategy_names() -> List[str]:
    return sorted(STRATEGIES)


def make_allocator(strategy: str = "monotonic") -> IdentifierAllocator:
    """Build a fresh allocator for the named strategy."""
    try:
        cls = STRATEGIES[strategy]
    except KeyError:
        raise unknown_strategy_error(strategy, strategy_names()) from None
    return cls()


def resource_id_for(item_id: str) -> str:
    """Resource identifiers hang off their owning item: I_102 -> I_102_R."""
    return f"{item_id}{RESOURCE_SUFFIX}"


def folder_name_for(item_id: str, prefix: str = ITEM_PREFIX) -> str:
    """Folder holding an item's descriptor: I_102 -> i_102."""
    token = item_id[len(prefix):] if item_id.startswith(prefix) else item_id
    return f"i_{token}".lower()
