#!/usr/bin/env python3
"""
Robot Cleaner Simulation

A battery-powered cleaning robot sweeping a grid room with one of several
traversal strategies (perimeter, s_pattern, spiral, random_walk).

Usage:
    robo-cleaner [--config configs/demo.yaml] [options]

Examples:
    robo-cleaner
    robo-cleaner --config configs/demo.yaml --strategy spiral --gif
    robo-cleaner --strategy perimeter s_pattern --energy 80 --seed 7
    robo-cleaner --render --pacing
"""

import argparse
import sys
import time
from pathlib import Path

from robo_cleaner.config import default_config, load_config, validate_strategies
from robo_cleaner.model.engine import SimulationEngine
from robo_cleaner.model.strategies import STRATEGY_LABELS
from robo_cleaner.export.console import ConsoleRenderer
from robo_cleaner.export.csv_writer import CSVWriter
from robo_cleaner.export.visualizer import Visualizer
from robo_cleaner.export.reporter import Reporter, describe_outcome


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Robot Cleaner Grid Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    robo-cleaner
    robo-cleaner --config configs/demo.yaml --strategy spiral --gif
    robo-cleaner --strategy perimeter s_pattern --energy 80 --seed 7
    robo-cleaner --render --pacing
        """
    )

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file '
                             '(default: built-in 10x10 demo room)')

    # Optional overrides
    parser.add_argument('--strategy', nargs='+', default=None,
                        help='Strategies to run in order '
                             '(perimeter, s_pattern, spiral, random_walk, random)')
    parser.add_argument('--energy', type=int, default=None,
                        help='Override battery capacity')
    parser.add_argument('--speed', type=int, default=None,
                        help='Override pacing delay in milliseconds')
    parser.add_argument('--no-recharge', dest='recharge', action='store_false',
                        default=None,
                        help='Do not recharge between strategy runs')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV export')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--render', action='store_true', default=False,
                        help='Redraw the room in the terminal after every event')
    parser.add_argument('--pacing', action='store_true', default=False,
                        help='Wait the agent speed between events (watchable runs)')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Load configuration
    try:
        config = load_config(args.config) if args.config else default_config()
        if args.strategy is not None:
            config.strategies = validate_strategies(args.strategy)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.energy is not None:
        config.agent.energy = args.energy
    if args.speed is not None:
        config.agent.speed = args.speed
    if args.recharge is not None:
        config.recharge_between = args.recharge
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    if args.render:
        config.render = True
    if args.pacing:
        config.pacing = True
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir

    # Initialize engine
    if not config.quiet:
        print(f"Initializing simulation...")
        print(f"  Grid: {config.grid.width}x{config.grid.height}")
        print(f"  Battery: {config.agent.energy}")
        print(f"  Strategies: {', '.join(config.strategies)}")

    try:
        engine = SimulationEngine(config, sleep=time.sleep if config.pacing else None)
    except (ValueError, IndexError) as e:
        print(f"Error building scenario: {e}", file=sys.stderr)
        return 1

    # Initialize exporters
    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(config.out_dir / 'simulation_log.csv')
        csv_writer.open()
        engine.add_observer(csv_writer.append)

    visualizer = Visualizer(config.grid.width, config.grid.height,
                            record_frames=config.gif_enabled)
    engine.add_observer(visualizer.update)

    reporter = Reporter(str(args.config) if args.config else None, config.seed)
    engine.add_observer(reporter.update)

    if config.render and not config.quiet:
        engine.add_observer(ConsoleRenderer().update)

    # Main simulation loop
    if not config.quiet:
        print(f"\nRunning simulation...")

    try:
        engine.run()
    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")

    if not config.quiet:
        for result in engine.results:
            print(f"  Selected strategy: {STRATEGY_LABELS[result.strategy]}")
            print(f"  {describe_outcome(result)} after {result.moves} moves")

    final_state = engine.snapshot()

    # Cleanup and final exports
    if csv_writer:
        csv_writer.close()
        if not config.quiet:
            print(f"\nCSV saved: {config.out_dir / 'simulation_log.csv'}")

    if config.snapshot_enabled:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        gif_path = config.out_dir / 'simulation.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path, fps=10)
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    # Print summary report
    if not config.quiet:
        report = reporter.generate_summary(
            engine.results,
            final_state,
            config.out_dir,
            config.csv_enabled,
            config.snapshot_enabled,
            config.gif_enabled
        )
        print(report)

    return 0


if __name__ == '__main__':
    sys.exit(main())
