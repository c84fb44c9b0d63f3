#!/usr/bin/env python3
"""
Demo: Three-Body Frames Without an Encoder

Runs the 3body preset for a bounded number of ticks:
1. Build the scene from a fixed seed
2. Write every Nth frame as a standalone PNG
3. Record trajectories and energy along the way
4. Save a trajectory / energy-drift summary plot

Useful for eyeballing the renderer and integrator without ffmpeg.
"""

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

from gravstream.analysis import TrajectoryRecorder, summarize
from gravstream.config import get_preset
from gravstream.render import encode_frame
from gravstream.scenes import create_scene
from gravstream.viz import plot_run_summary, save_figure


def main():
    print("=" * 60)
    print("  THREE-BODY FRAMES")
    print("=" * 60)

    config = get_preset("3body").with_seed(42)
    n_ticks = 3000
    frame_every = 250

    scene = create_scene(config)
    physics = config.physics

    print(f"\n1. Setup:")
    print(f"   Particles: {physics.count}, mass={physics.mass:g}")
    print(f"   Law: {physics.force_law}, integrator: {physics.integrator}")
    print(f"   Epoch: {physics.epoch:g}, canvas: {config.render.size}px")

    output_dir = Path("output/demo_three_body")
    output_dir.mkdir(parents=True, exist_ok=True)

    recorder = TrajectoryRecorder(gravitational_constant=physics.gravitational_constant, every=10)
    recorder.record(0, scene.particles)

    print(f"\n2. Running {n_ticks} ticks...")
    start = summarize(scene.particles, scene.system.force_model)
    for tick in range(1, n_ticks + 1):
        if tick % frame_every == 0:
            path = output_dir / f"frame_{tick:05d}.png"
            path.write_bytes(encode_frame(scene.render(), "png"))
        scene.advance()
        recorder.record(tick, scene.particles)
    end = summarize(scene.particles, scene.system.force_model)

    print(f"   Frames written: {n_ticks // frame_every}")
    print(f"   Total energy: {start['total_energy']:.4e} -> {end['total_energy']:.4e}")
    print(f"   Min separation: {end['min_separation']:.2f}")

    print("\n3. Creating visualization...")
    fig = plot_run_summary(
        recorder,
        title=f"Three-Body Leapfrog, {n_ticks} ticks",
        extent=config.render.size / 2,
    )
    output_path = output_dir / "summary.png"
    save_figure(fig, output_path)
    print(f"   Saved: {output_path}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
