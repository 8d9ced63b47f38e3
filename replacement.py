import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from errors import ConfigError


class Policy(Enum):
    FIFO = 'fifo'
    LRU = 'lru'
    OPTIMAL = 'optimal'
    RANDOM = 'random'

    @classmethod
    def parse(cls, name):
        if isinstance(name, cls):
            return name
        for member in cls:
            if member.value == name:
                return member
        valid = ', '.join(member.value for member in cls)
        raise ConfigError(f"unknown replacement policy {name!r} (expected one of: {valid})")


@dataclass(frozen=True)
class EvictionResult:
    """Who was displaced, and from which frame."""
    process_id: int
    page_number: int
    frame: int


@dataclass(frozen=True)
class EvictionContext:
    trace: Sequence
    position: int


class EvictionPolicy:
    """
    All replacement policies implement choose_victim(), which returns the
    index of one occupied frame inside ``region``. The region is full
    whenever a victim is requested.
    """

    policy: Policy
    uses_recency = False

    def choose_victim(self, allocator, region, context):
        raise NotImplementedError

    @property
    def name(self):
        return self.policy.value


class FifoPolicy(EvictionPolicy):
    policy = Policy.FIFO

    def choose_victim(self, allocator, region, context):
        # Slots are filled in cursor order, so the cursor marks the oldest one
        frame_num = region.start + region.cursor
        region.advance()
        return frame_num


class LruPolicy(EvictionPolicy):
    policy = Policy.LRU
    uses_recency = True

    def choose_victim(self, allocator, region, context):
        return next(iter(region.recency))


class OptimalPolicy(EvictionPolicy):
    """
    Optimal algorithm: replace the page whose next reference lies furthest
    in the future. A page that is never referenced again is taken at once,
    so among several such pages the lowest frame index wins.
    """

    policy = Policy.OPTIMAL

    def choose_victim(self, allocator, region, context):
        trace = context.trace
        victim_frame = None
        max_future_time = -1

        for frame_num in region.frame_numbers():
            resident = allocator.get_frame_info(frame_num)

            next_ref_time = None
            for idx in range(context.position + 1, len(trace)):
                if (trace[idx].process_id, trace[idx].page_number) == resident:
                    next_ref_time = idx
                    break

            if next_ref_time is None:
                return frame_num
            if next_ref_time > max_future_time:
                max_future_time = next_ref_time
                victim_frame = frame_num

        return victim_frame


class RandomPolicy(EvictionPolicy):
    policy = Policy.RANDOM

    def __init__(self, seed=None):
        self.seed = seed
        self.rng = random.Random(seed)

    def choose_victim(self, allocator, region, context):
        return region.start + self.rng.randrange(region.size)


POLICIES = {
    Policy.FIFO: FifoPolicy,
    Policy.LRU: LruPolicy,
    Policy.OPTIMAL: OptimalPolicy,
    Policy.RANDOM: RandomPolicy,
}


def make_policy(policy, seed: Optional[int] = None):
    policy = Policy.parse(policy)
    if policy is Policy.RANDOM:
        return RandomPolicy(seed)
    return POLICIES[policy]()
