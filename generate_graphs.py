import argparse
import sys

import matplotlib.pyplot as plt

from errors import SimulationError
from memory_manager import Allocation
from replacement import Policy
from simulator import SimulationConfig, simulate
from trace_loader import load_trace


def sweep(records, page_size, frame_counts, policies=tuple(Policy),
          allocation=Allocation.GLOBAL, num_processes=4, seed=None):
    """Global fault count for every policy at every frame count."""
    results = {}
    for policy in policies:
        policy = Policy.parse(policy)
        faults = []
        for num_frames in frame_counts:
            config = SimulationConfig(page_size, num_frames, policy, allocation,
                                      num_processes, seed)
            faults.append(simulate(records, config).page_faults)
        results[policy.value] = faults
    return results


def plot_sweep(records, page_size, max_frames, output='fault_sweep.png',
               num_processes=4, seed=None, title=None):
    allocations = [Allocation.GLOBAL, Allocation.LOCAL]

    fig, axes = plt.subplots(1, len(allocations), figsize=(12, 5), sharey=True)
    fig.suptitle(title or 'Page Faults vs. Physical Frames', fontsize=14, fontweight='bold')

    results = {}
    for ax, allocation in zip(axes, allocations):
        # Local allocation needs at least one frame per process
        first = 1 if allocation is Allocation.GLOBAL else num_processes
        frame_counts = list(range(first, max_frames + 1))
        data = sweep(records, page_size, frame_counts, allocation=allocation,
                     num_processes=num_processes, seed=seed)
        results[allocation.value] = (frame_counts, data)

        for name, faults in data.items():
            ax.plot(frame_counts, faults, marker='o', markersize=3, label=name.upper())

        ax.set_title(f"{allocation.value.capitalize()} allocation")
        ax.set_xlabel('Frames')
        ax.grid(alpha=0.3)

    axes[0].set_ylabel('Page Faults')
    axes[-1].legend(loc='upper right', frameon=True)

    plt.tight_layout()
    plt.savefig(output, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(description='Plot page faults against frame count.')
    parser.add_argument('trace_file')
    parser.add_argument('page_size', type=int)
    parser.add_argument('max_frames', type=int)
    parser.add_argument('--processes', type=int, default=4)
    parser.add_argument('--seed', type=int, default=0)
    parser.add_argument('--output', default='fault_sweep.png')
    args = parser.parse_args(argv)

    print("Running simulations...")
    try:
        records = load_trace(args.trace_file, args.page_size)
        plot_sweep(records, args.page_size, args.max_frames, args.output,
                   num_processes=args.processes, seed=args.seed,
                   title=f"Page Faults vs. Physical Frames ({args.trace_file})")
    except SimulationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"\nGraph saved as '{args.output}'")
    return 0


if __name__ == '__main__':
    sys.exit(main())
