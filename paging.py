# paging.py
"""
Paging & address translation engine.

Physical memory is a fixed array of frames. Processes are split into pages of
frame size and each page is placed in some free frame; the page table of a
process records where every page went. Logical addresses are resolved by
laying the allocated processes end to end in allocation order.

All state lives in an immutable MemorySession. Every operation takes a
session and returns a new one, so a failed operation can never leave memory
half-modified.
"""

from __future__ import annotations

import logging
import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

DEFAULT_PALETTE_SIZE = 8


# =============================================================================
# ERRORS
# =============================================================================

class PagingError(Exception):
    """Base class for failures reported by the paging engine."""


class DuplicateProcessError(PagingError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Process name already exists: {name}")
        self.name = name


class InsufficientFramesError(PagingError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            f"Not enough free memory. Need {required} frames, only {available} available."
        )
        self.required = required
        self.available = available


class AddressOutOfRangeError(PagingError, IndexError):
    def __init__(self, address: int) -> None:
        super().__init__(f"Logical address {address} doesn't belong to any allocated process")
        self.address = address


class PageNotResidentError(PagingError, LookupError):
    def __init__(self, process: str, page: int) -> None:
        super().__init__(f"Page {page} of {process} is not in memory")
        self.process = process
        self.page = page


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class FrameTag:
    """Backreference from an occupied frame to the page it holds."""
    process: str
    page: int


@dataclass(frozen=True)
class PageTableEntry:
    page: int
    frame: int


@dataclass(frozen=True)
class PagedProcess:
    """
    A process placed in memory under paging.

    Attributes:
        name (str): Unique process name
        size (int): Requested size in KB
        color (int): Palette slot assigned at allocation time
        page_table (Tuple[PageTableEntry, ...]): Page -> frame mappings, by page number
    """
    name: str
    size: int
    color: int
    page_table: Tuple[PageTableEntry, ...]

    @property
    def page_count(self) -> int:
        return len(self.page_table)

    def frame_of(self, page: int) -> Optional[int]:
        for entry in self.page_table:
            if entry.page == page:
                return entry.frame
        return None


@dataclass(frozen=True)
class Translation:
    process: str
    logical: int
    page: int
    offset: int
    frame: int
    physical: int


@dataclass(frozen=True)
class MemorySession:
    """
    Snapshot of paged physical memory.

    Attributes:
        total_memory (int): Physical memory size in KB
        frame_size (int): Size of each frame (and page) in KB
        frames (Tuple[Optional[FrameTag], ...]): Frame table, None marks a free frame
        processes (Tuple[PagedProcess, ...]): Allocated processes in allocation order
    """
    total_memory: int
    frame_size: int
    frames: Tuple[Optional[FrameTag], ...] = ()
    processes: Tuple[PagedProcess, ...] = ()

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def find_process(self, name: str) -> Optional[PagedProcess]:
        for process in self.processes:
            if process.name == name:
                return process
        return None

    def free_frames(self) -> List[int]:
        return [i for i, tag in enumerate(self.frames) if tag is None]


# =============================================================================
# FRAME SELECTION POLICIES
# =============================================================================

class FrameSelector(ABC):
    """Chooses which free frames receive the pages of a new process."""

    @abstractmethod
    def select(self, free_frames: Sequence[int], count: int) -> List[int]:
        """Return ``count`` distinct frames from ``free_frames``, one per page in page order."""


class RandomFrameSelector(FrameSelector):
    """
    Scatter pages over random free frames, like a real allocator would
    after memory has been in use for a while.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def select(self, free_frames: Sequence[int], count: int) -> List[int]:
        return self.rng.sample(list(free_frames), count)


class FirstFreeFrameSelector(FrameSelector):
    """Fill the lowest numbered free frames first."""

    def select(self, free_frames: Sequence[int], count: int) -> List[int]:
        return sorted(free_frames)[:count]


# =============================================================================
# OPERATIONS
# =============================================================================

def initialize(total_memory: int, frame_size: int) -> MemorySession:
    """
    Create an empty session with total_memory // frame_size free frames.

    Raises:
        ValueError: If frame_size is below 1 or total_memory is negative
    """
    if frame_size < 1:
        raise ValueError("Frame size must be at least 1")
    if total_memory < 0:
        raise ValueError("Total memory cannot be negative")

    frame_count = total_memory // frame_size
    logger.debug("Memory initialized: %d frames of %d KB", frame_count, frame_size)
    return MemorySession(total_memory, frame_size, (None,) * frame_count, ())


def allocate_process(session: MemorySession, name: str, size: int,
                     selector: Optional[FrameSelector] = None,
                     palette_size: int = DEFAULT_PALETTE_SIZE) -> MemorySession:
    """
    Place a new process into free frames.

    Args:
        session: Current memory state
        name: Unique process name
        size: Process size in KB, must be positive
        selector: Frame placement policy, random placement by default
        palette_size: Number of colors the caller cycles through

    Returns:
        MemorySession: New state with the process and its page table added

    Raises:
        ValueError: If size is not positive
        DuplicateProcessError: If a process with this name is already allocated
        InsufficientFramesError: If fewer free frames remain than pages needed
    """
    if size <= 0:
        raise ValueError("Process size must be greater than 0")
    if session.find_process(name) is not None:
        raise DuplicateProcessError(name)

    pages_needed = math.ceil(size / session.frame_size)
    free = session.free_frames()
    if len(free) < pages_needed:
        raise InsufficientFramesError(pages_needed, len(free))

    selector = selector or RandomFrameSelector()
    chosen = selector.select(free, pages_needed)
    if len(chosen) != pages_needed or len(set(chosen)) != pages_needed or not set(chosen) <= set(free):
        raise ValueError("Frame selector must return distinct free frames, one per page")

    frames = list(session.frames)
    page_table = []
    for page, frame in enumerate(chosen):
        frames[frame] = FrameTag(name, page)
        page_table.append(PageTableEntry(page, frame))

    process = PagedProcess(
        name=name,
        size=size,
        color=len(session.processes) % max(palette_size, 1),
        page_table=tuple(page_table),
    )
    logger.debug("Allocated %s (%d KB) in %d pages: frames %s", name, size, pages_needed, chosen)
    return replace(session, frames=tuple(frames), processes=session.processes + (process,))


def deallocate_process(session: MemorySession, name: str) -> MemorySession:
    """
    Release every frame held by ``name`` and drop its page table.

    An unknown name leaves the session unchanged.
    """
    process = session.find_process(name)
    if process is None:
        return session

    frames = list(session.frames)
    for entry in process.page_table:
        frames[entry.frame] = None

    logger.debug("Deallocated %s, freed %d frames", name, process.page_count)
    return replace(
        session,
        frames=tuple(frames),
        processes=tuple(p for p in session.processes if p.name != name),
    )


def translate_address(session: MemorySession, address: int) -> Translation:
    """
    Translate a logical address to a physical one.

    Logical space is the concatenation of every allocated process in
    allocation order, so the first process owns addresses [0, size0), the
    second [size0, size0 + size1), and so on.

    Raises:
        AddressOutOfRangeError: If no process owns the address
        PageNotResidentError: If the owning page has no frame
    """
    if address < 0:
        raise AddressOutOfRangeError(address)

    base = 0
    owner = None
    for process in session.processes:
        if address < base + process.size:
            owner = process
            break
        base += process.size

    if owner is None:
        raise AddressOutOfRangeError(address)

    relative = address - base
    page = relative // session.frame_size
    offset = relative % session.frame_size

    frame = owner.frame_of(page)
    if frame is None:
        raise PageNotResidentError(owner.name, page)

    return Translation(
        process=owner.name,
        logical=address,
        page=page,
        offset=offset,
        frame=frame,
        physical=frame * session.frame_size + offset,
    )


def session_stats(session: MemorySession) -> Dict[str, float]:
    """
    Frame usage summary.

    Returns:
        Dict[str, float]: total_frames, used_frames, free_frames,
        utilization (percent of frames in use) and processes
    """
    total = session.frame_count
    used = sum(1 for tag in session.frames if tag is not None)
    return {
        "total_frames": total,
        "used_frames": used,
        "free_frames": total - used,
        "utilization": (used / total * 100) if total > 0 else 0.0,
        "processes": len(session.processes),
    }
