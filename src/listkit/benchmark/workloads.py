"""Named workloads exercising the list operations.

A workload is a factory taking a size and returning a runner: a callable
that performs one run and returns the time spent in the measured section,
in seconds. Setup (building the list to iterate, for instance) happens
outside the measured section.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from listkit.persistent import PersistentList
from listkit.stack import OwnedList

Runner = Callable[[], float]
Workload = Callable[[int], Runner]

WORKLOADS: dict[str, Workload] = {}


def workload(name: str) -> Callable[[Workload], Workload]:
    """Register a workload factory under ``name``."""

    def register(factory: Workload) -> Workload:
        WORKLOADS[name] = factory
        return factory

    return register


def get_workload(name: str) -> Workload:
    """Look up a registered workload.

    Raises KeyError if ``name`` is unknown.
    """
    try:
        return WORKLOADS[name]
    except KeyError:
        known = ", ".join(sorted(WORKLOADS))
        msg = f"Unknown workload '{name}' (known: {known})"
        raise KeyError(msg) from None


def build_owned(size: int) -> OwnedList[int]:
    owned: OwnedList[int] = OwnedList()
    for i in range(size):
        owned.push(i)
    return owned


def build_persistent(size: int) -> PersistentList[int]:
    shared: PersistentList[int] = PersistentList()
    for i in range(size):
        shared = shared.append(i)
    return shared


@workload("push_pop")
def push_pop(size: int) -> Runner:
    """Push then pop every element of an owned list."""

    def run() -> float:
        owned: OwnedList[int] = OwnedList()
        start = time.perf_counter()
        for i in range(size):
            owned.push(i)
        for _ in range(size):
            owned.pop()
        return time.perf_counter() - start

    return run


@workload("peek")
def peek(size: int) -> Runner:
    """Alternate peek and peek_mut on a one-element owned list."""

    def run() -> float:
        owned = build_owned(1)
        start = time.perf_counter()
        for _ in range(size):
            owned.peek()
            ref = owned.peek_mut()
            ref.value += 1
        return time.perf_counter() - start

    return run


@workload("into_iter")
def into_iter(size: int) -> Runner:
    """Drain an owned list through its consuming iterator."""

    def run() -> float:
        owned = build_owned(size)
        start = time.perf_counter()
        for _ in owned.into_iter():
            pass
        return time.perf_counter() - start

    return run


@workload("iter")
def iter_shared(size: int) -> Runner:
    """Walk an owned list with a shared iterator."""
    owned = build_owned(size)

    def run() -> float:
        start = time.perf_counter()
        for _ in owned.iter():
            pass
        return time.perf_counter() - start

    return run


@workload("iter_mut")
def iter_mut(size: int) -> Runner:
    """Increment every element of an owned list through iter_mut."""
    owned = build_owned(size)

    def run() -> float:
        start = time.perf_counter()
        for ref in owned.iter_mut():
            ref.value += 1
        return time.perf_counter() - start

    return run


@workload("owned_drop")
def owned_drop(size: int) -> Runner:
    """Tear down an owned list explicitly."""

    def run() -> float:
        owned = build_owned(size)
        start = time.perf_counter()
        owned.drop()
        return time.perf_counter() - start

    return run


@workload("append_tail")
def append_tail(size: int) -> Runner:
    """Build a persistent list, then walk it down with tail()."""

    def run() -> float:
        start = time.perf_counter()
        shared = build_persistent(size)
        while shared is not None:
            shared = shared.tail()
        return time.perf_counter() - start

    return run


@workload("persistent_iter")
def persistent_iter(size: int) -> Runner:
    """Walk a persistent list with its shared iterator."""
    shared = build_persistent(size)

    def run() -> float:
        start = time.perf_counter()
        for _ in shared:
            pass
        return time.perf_counter() - start

    return run


@workload("persistent_drop")
def persistent_drop(size: int) -> Runner:
    """Drop the only handle to a persistent list."""

    def run() -> float:
        shared = build_persistent(size)
        start = time.perf_counter()
        shared.drop()
        return time.perf_counter() - start

    return run


@workload("shared_suffix")
def shared_suffix(size: int) -> Runner:
    """Branch many lists off one base, then drop them; the base survives."""
    base = build_persistent(size)

    def run() -> float:
        start = time.perf_counter()
        branches = [base.append(i) for i in range(size)]
        for branch in branches:
            branch.drop()
        return time.perf_counter() - start

    return run
