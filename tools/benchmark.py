#!/usr/bin/env python3
"""
Headless emitter benchmark.

Usage:
    python3 tools/benchmark.py [--frames 600] [--emitters 20] [--seed 1]

For each preset this script:
1. Spawns N emitters of that preset in one ParticleSystem.
2. Steps the system at a fixed 1/60 s for the requested frame count.
3. Prints per-frame update cost and peak particle load.
"""

import argparse
import os
import statistics
import sys
import time

# Ensure we can import the package from root
current_dir = os.path.dirname(os.path.abspath(__file__))
root_dir = os.path.dirname(current_dir)
sys.path.insert(0, root_dir)

from motion.particle_emitter import PRESETS  # noqa: E402
from motion.particle_system import ParticleSystem  # noqa: E402
from motion.services import build_context  # noqa: E402
from motion.vector import Vector2  # noqa: E402

FRAME_BUDGET_MS = 16.0


def run_preset(name: str, frames: int, emitters: int, seed=None):
    """Step ``emitters`` copies of a preset; return per-frame samples."""
    system = ParticleSystem(build_context(seed), auto_prune=False)
    for i in range(emitters):
        system.spawn_preset(name, Vector2(40.0 * i, 300.0))

    work_ms = []
    particles = []
    for _ in range(frames):
        start = time.perf_counter()
        summary = system.update(1 / 60)
        work_ms.append((time.perf_counter() - start) * 1000.0)
        particles.append(summary["particles"])
    return {"work_ms": work_ms, "particles": particles}


def report(name: str, samples) -> None:
    work_ms = samples["work_ms"]
    particles = samples["particles"]
    if not work_ms:
        print(f"{name}: no samples.")
        return

    print("\n" + "=" * 40)
    print(f" {name.upper()}")
    print("=" * 40)
    print(f"Total Frames: {len(work_ms)}")
    print(f"  Avg Update: {statistics.mean(work_ms):.3f} ms")
    print(f"  Max Update: {max(work_ms):.3f} ms")
    print(f"  Peak Particles: {max(particles)}")

    spikes = [w for w in work_ms if w > FRAME_BUDGET_MS]
    if spikes:
        print(f"WARNING: {len(spikes)} updates over the {FRAME_BUDGET_MS:.0f}ms frame budget.")
    else:
        print("Status: Clean. No updates over the frame budget.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="headless emitter benchmark")
    parser.add_argument("--frames", type=int, default=600)
    parser.add_argument("--emitters", type=int, default=20)
    parser.add_argument("--seed", type=int, default=1)
    args = parser.parse_args(argv)

    for name in sorted(PRESETS):
        report(name, run_preset(name, args.frames, args.emitters, args.seed))


if __name__ == "__main__":
    main()
