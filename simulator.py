import argparse
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from errors import ConfigError, ProcessIdError, SimulationError
from memory_manager import Allocation, FrameAllocator, Statistics
from page_table import PageTable
from replacement import EvictionContext, Policy, make_policy
from trace_loader import load_trace, page_shift


DEFAULT_PROCESSES = 4


@dataclass
class SimulationConfig:
    page_size: int
    num_frames: int
    policy: Policy
    allocation: Allocation = Allocation.GLOBAL
    num_processes: int = DEFAULT_PROCESSES
    seed: Optional[int] = None

    def validate(self):
        self.policy = Policy.parse(self.policy)
        self.allocation = Allocation.parse(self.allocation)
        page_shift(self.page_size)
        if self.num_frames < 1:
            raise ConfigError(f"number of frames must be positive, got {self.num_frames}")
        if self.num_processes < 1:
            raise ConfigError(f"number of processes must be positive, got {self.num_processes}")
        if self.allocation is Allocation.LOCAL and self.num_frames < self.num_processes:
            raise ConfigError(
                f"local allocation needs at least one frame per process "
                f"({self.num_frames} frames, {self.num_processes} processes)"
            )
        return self


class AccessOutcome(Enum):
    HIT = 'HIT'
    FAULT_FREE = 'FAULT'
    FAULT_EVICT = 'EVICT'


class VirtualMemorySimulator:

    def __init__(self, config, records, verbose=False):
        self.config = config.validate()
        self.trace = list(records)
        self.verbose = verbose
        self.policy = make_policy(config.policy, config.seed)
        self.frames = FrameAllocator(config.num_frames, config.allocation,
                                     config.num_processes)
        self.page_tables = [PageTable(pid) for pid in range(config.num_processes)]
        self.stats = Statistics(config.num_processes)
        self.history = []  # (AccessOutcome, EvictionResult or None) per access

        for position, record in enumerate(self.trace):
            if not 0 <= record.process_id < config.num_processes:
                raise ProcessIdError(record.process_id, config.num_processes, position)

        if self.frames.unused_frames:
            print(f"warning: {self.frames.unused_frames} frame(s) left unused by the "
                  f"{config.num_processes}-way local split of {config.num_frames} frames",
                  file=sys.stderr)

    def handle_memory_reference(self, position):
        process_id, page_num = self.trace[position]
        page_table = self.page_tables[process_id]

        frame_num = page_table.lookup(page_num)
        if frame_num is not None:
            # Page hit
            if self.policy.uses_recency:
                self.frames.touch(frame_num)
            outcome, evicted = AccessOutcome.HIT, None
        else:
            outcome, evicted = self.handle_page_fault(position, process_id, page_num)

        self.history.append((outcome, evicted))
        if self.verbose:
            self._print_access(position, outcome, evicted)
        return outcome, evicted

    step = handle_memory_reference

    def handle_page_fault(self, position, process_id, page_num):
        page_table = self.page_tables[process_id]
        self.stats.record_page_fault(process_id)
        page_table.record_fault()

        frame_num = self.frames.allocate(process_id, page_num)
        if frame_num is not None:
            page_table.insert(page_num, frame_num)
            return AccessOutcome.FAULT_FREE, None

        context = EvictionContext(self.trace, position)
        evicted = self.frames.evict_via(self.policy, process_id, page_num, context)
        self.page_tables[evicted.process_id].remove(evicted.page_number)
        page_table.insert(page_num, evicted.frame)
        return AccessOutcome.FAULT_EVICT, evicted

    def run(self):
        for position in range(len(self.history), len(self.trace)):
            self.handle_memory_reference(position)
        return self.stats

    def check_invariants(self):
        resident = 0
        for page_table in self.page_tables:
            pid = page_table.process_id
            for page_num, frame_num in page_table.items():
                occupant = self.frames.get_frame_info(frame_num)
                assert occupant == (pid, page_num), (
                    f"process {pid} page {page_num} maps to frame {frame_num} "
                    f"holding {occupant}"
                )
                assert frame_num in self.frames.region_for(pid), (
                    f"process {pid} page {page_num} sits outside its region in frame {frame_num}"
                )
                resident += 1
            assert page_table.fault_count() == self.stats.process_faults[pid], (
                f"process {pid} fault counters disagree"
            )

        occupied = sum(1 for frame in self.frames.frames if frame is not None)
        assert occupied == resident, f"{occupied} occupied frames but {resident} mapped pages"
        assert self.stats.page_faults == sum(self.stats.process_faults), (
            "global fault count differs from the per-process sum"
        )

    def _print_access(self, position, outcome, evicted):
        process_id, page_num = self.trace[position]
        line = f"{position}: P{process_id} page {page_num} {outcome.value}"
        if evicted is not None:
            line += (f" (evicted P{evicted.process_id} page {evicted.page_number}"
                     f" from frame {evicted.frame})")
        print(line)


def simulate(records, config, verbose=False):
    return VirtualMemorySimulator(config, records, verbose=verbose).run()


def run_file(filename, config, verbose=False):
    config.validate()
    records = load_trace(filename, config.page_size)
    return simulate(records, config, verbose=verbose)


class _ArgumentParser(argparse.ArgumentParser):
    # Usage mistakes exit with 1, like every other failed run
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser():
    parser = _ArgumentParser(
        description='Replay a memory trace and count page faults.')
    parser.add_argument('page_size', type=int, help='page size in bytes (power of two)')
    parser.add_argument('num_frames', type=int, help='total physical frames')
    parser.add_argument('replacement_policy',
                        help='one of: ' + ', '.join(p.value for p in Policy))
    parser.add_argument('trace_file', help='file of process_id,virtual_address lines')
    parser.add_argument('--allocation', default=Allocation.GLOBAL.value,
                        choices=[a.value for a in Allocation],
                        help='share one frame pool or split it per process')
    parser.add_argument('--processes', type=int, default=DEFAULT_PROCESSES,
                        help='number of processes (default: %(default)s)')
    parser.add_argument('--seed', type=int, default=None,
                        help='seed for the random policy')
    parser.add_argument('--verbose', action='store_true',
                        help='print the outcome of every access')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        config = SimulationConfig(
            page_size=args.page_size,
            num_frames=args.num_frames,
            policy=args.replacement_policy,
            allocation=args.allocation,
            num_processes=args.processes,
            seed=args.seed,
        )
        stats = run_file(args.trace_file, config, verbose=args.verbose)
    except SimulationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(stats)
    return 0


if __name__ == '__main__':
    sys.exit(main())
