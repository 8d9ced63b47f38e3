import pytest

from errors import ConfigError
from memory_manager import Allocation, FrameAllocator
from replacement import (
    EvictionContext,
    FifoPolicy,
    LruPolicy,
    OptimalPolicy,
    Policy,
    RandomPolicy,
    make_policy,
)
from trace_loader import AccessRecord, records_from_pages


def full_pool(pages, process_id=0):
    allocator = FrameAllocator(len(pages))
    for page in pages:
        allocator.allocate(process_id, page)
    return allocator


class TestPolicyNames:
    @pytest.mark.parametrize("name, policy_class", [
        ("fifo", FifoPolicy),
        ("lru", LruPolicy),
        ("optimal", OptimalPolicy),
        ("random", RandomPolicy),
    ])
    def test_known_names(self, name, policy_class):
        assert isinstance(make_policy(name), policy_class)
        assert make_policy(name).name == name

    @pytest.mark.parametrize("name", ["FIFO", "Lru", "opt", "clock", ""])
    def test_unknown_names_fail(self, name):
        """Names match exactly; anything else is a configuration error."""
        with pytest.raises(ConfigError):
            Policy.parse(name)

    def test_parse_accepts_members(self):
        assert Policy.parse(Policy.LRU) is Policy.LRU


class TestFifo:
    def test_evicts_at_cursor_and_advances(self):
        allocator = full_pool([1, 2, 3])
        policy = FifoPolicy()
        region = allocator.region_for(0)
        context = EvictionContext([], 0)

        assert policy.choose_victim(allocator, region, context) == 0
        assert policy.choose_victim(allocator, region, context) == 1
        assert policy.choose_victim(allocator, region, context) == 2
        assert policy.choose_victim(allocator, region, context) == 0

    def test_hits_do_not_change_order(self):
        allocator = full_pool([1, 2, 3])
        allocator.touch(0)
        victim = FifoPolicy().choose_victim(allocator, allocator.region_for(0),
                                            EvictionContext([], 0))
        assert victim == 0


class TestLru:
    def test_least_recently_touched(self):
        allocator = full_pool([1, 2, 3])
        allocator.touch(0)
        allocator.touch(1)
        victim = LruPolicy().choose_victim(allocator, allocator.region_for(0),
                                           EvictionContext([], 0))
        assert victim == 2

    def test_stays_in_partition(self):
        allocator = FrameAllocator(4, Allocation.LOCAL, 2)
        allocator.allocate(1, 5)
        allocator.allocate(0, 1)
        allocator.allocate(0, 2)
        allocator.allocate(1, 6)
        victim = LruPolicy().choose_victim(allocator, allocator.region_for(1),
                                           EvictionContext([], 0))
        assert victim == 2


class TestOptimal:
    def test_farthest_next_use(self):
        trace = records_from_pages([1, 2, 3, 4, 1, 2, 3])
        allocator = full_pool([1, 2, 3])
        victim = OptimalPolicy().choose_victim(allocator, allocator.region_for(0),
                                               EvictionContext(trace, 3))
        assert victim == 2

    def test_never_used_again_taken_first(self):
        """The first frame with no future reference wins, in index order."""
        trace = records_from_pages([1, 2, 3, 4, 3])
        allocator = full_pool([1, 2, 3])
        victim = OptimalPolicy().choose_victim(allocator, allocator.region_for(0),
                                               EvictionContext(trace, 3))
        assert victim == 0

    def test_matches_process_and_page(self):
        """A future access to the same page by another process does not count."""
        trace = [AccessRecord(0, 1), AccessRecord(0, 2), AccessRecord(0, 3),
                 AccessRecord(1, 1), AccessRecord(0, 2)]
        allocator = full_pool([1, 2])
        victim = OptimalPolicy().choose_victim(allocator, allocator.region_for(0),
                                               EvictionContext(trace, 2))
        assert victim == 0

    def test_lookahead_starts_after_current_access(self):
        trace = records_from_pages([1, 2, 1, 2])
        allocator = full_pool([1, 2])
        # Page 1 is being accessed at position 2 itself; its next use is never
        victim = OptimalPolicy().choose_victim(allocator, allocator.region_for(0),
                                               EvictionContext(trace, 2))
        assert victim == 0


class TestRandom:
    def test_victim_inside_region(self):
        allocator = FrameAllocator(6, Allocation.LOCAL, 3)
        for pid in range(3):
            allocator.allocate(pid, 1)
            allocator.allocate(pid, 2)
        policy = RandomPolicy(seed=1)
        region = allocator.region_for(2)
        for _ in range(50):
            assert policy.choose_victim(allocator, region, EvictionContext([], 0)) in (4, 5)

    def test_seed_is_reproducible(self):
        allocator = full_pool(list(range(8)))
        region = allocator.region_for(0)
        context = EvictionContext([], 0)

        first, second = RandomPolicy(seed=42), RandomPolicy(seed=42)
        picks = [first.choose_victim(allocator, region, context) for _ in range(20)]
        assert picks == [second.choose_victim(allocator, region, context) for _ in range(20)]
