from collections import OrderedDict
from enum import Enum

from errors import ConfigError
from replacement import EvictionResult


class Allocation(Enum):
    GLOBAL = 'global'
    LOCAL = 'local'

    @classmethod
    def parse(cls, name):
        if isinstance(name, cls):
            return name
        for member in cls:
            if member.value == name:
                return member
        valid = ', '.join(member.value for member in cls)
        raise ConfigError(f"unknown allocation mode {name!r} (expected one of: {valid})")


class Region:
    """A contiguous run of frames that some set of processes allocates from.

    The cursor is relative to ``start``. Fresh allocations scan forward
    from it and the FIFO policy evicts at it, so with no frame ever
    released the cursor always points at the oldest assigned slot.
    """

    def __init__(self, start, size):
        self.start = start
        self.size = size
        self.cursor = 0
        # frame index -> None, least recently touched first
        self.recency = OrderedDict()

    def frame_numbers(self):
        return range(self.start, self.start + self.size)

    def advance(self):
        self.cursor = (self.cursor + 1) % self.size

    def __contains__(self, frame_num):
        return self.start <= frame_num < self.start + self.size

    def __repr__(self):
        return f"Region(start={self.start}, size={self.size}, cursor={self.cursor})"


class FrameAllocator:
    def __init__(self, num_frames, allocation=Allocation.GLOBAL, num_processes=1):
        if num_frames < 1:
            raise ConfigError(f"number of frames must be positive, got {num_frames}")
        if num_processes < 1:
            raise ConfigError(f"number of processes must be positive, got {num_processes}")

        self.num_frames = num_frames
        self.allocation = Allocation.parse(allocation)
        self.num_processes = num_processes
        # Each frame stores (process_id, page_number) or None if free
        self.frames = [None] * num_frames

        if self.allocation is Allocation.GLOBAL:
            self.regions = [Region(0, num_frames)]
            self._resolve = lambda process_id: self.regions[0]
        else:
            partition = num_frames // num_processes
            if partition == 0:
                raise ConfigError(
                    f"{num_frames} frames cannot be partitioned among "
                    f"{num_processes} processes"
                )
            self.regions = [Region(pid * partition, partition)
                            for pid in range(num_processes)]
            self._resolve = lambda process_id: self.regions[process_id]

    @property
    def unused_frames(self):
        """Frames outside every region (the remainder of a local split)."""
        used = sum(region.size for region in self.regions)
        return self.num_frames - used

    def region_for(self, process_id):
        return self._resolve(process_id)

    def get_frame_info(self, frame_num):
        return self.frames[frame_num]

    def allocate(self, process_id, page_number):
        region = self.region_for(process_id)
        for step in range(region.size):
            offset = (region.cursor + step) % region.size
            frame_num = region.start + offset
            if self.frames[frame_num] is None:
                self._install(region, frame_num, process_id, page_number)
                region.cursor = (offset + 1) % region.size
                return frame_num
        return None

    def evict_via(self, policy, process_id, page_number, context):
        region = self.region_for(process_id)
        frame_num = policy.choose_victim(self, region, context)
        old_pid, old_page = self.frames[frame_num]

        self.free_frame(frame_num)
        self._install(region, frame_num, process_id, page_number)
        return EvictionResult(old_pid, old_page, frame_num)

    def touch(self, frame_num):
        self.region_for(self.frames[frame_num][0]).recency.move_to_end(frame_num)

    def free_frame(self, frame_num):
        process_id = self.frames[frame_num][0]
        self.region_for(process_id).recency.pop(frame_num, None)
        self.frames[frame_num] = None

    def _install(self, region, frame_num, process_id, page_number):
        self.frames[frame_num] = (process_id, page_number)
        region.recency[frame_num] = None

    def is_full(self, process_id):
        region = self.region_for(process_id)
        return all(self.frames[f] is not None for f in region.frame_numbers())


class Statistics:
    def __init__(self, num_processes):
        self.page_faults = 0
        self.process_faults = [0] * num_processes

    def record_page_fault(self, process_id):
        self.page_faults += 1
        self.process_faults[process_id] += 1

    def as_dict(self):
        return {
            'page_faults': self.page_faults,
            'process_faults': list(self.process_faults),
        }

    def __str__(self):
        lines = [f"Global page fault count: {self.page_faults}"]
        for pid, count in enumerate(self.process_faults):
            lines.append(f"Process {pid} page fault count: {count}")
        return '\n'.join(lines)
