"""Tests for console rendering, CSV export, images and the text report."""

import csv
import io

import numpy as np

from robo_cleaner.config import AgentConfig, GridConfig, LayoutConfig, RegionSpec, SimulationConfig
from robo_cleaner.export.console import ConsoleRenderer, render_grid
from robo_cleaner.export.csv_writer import CSVWriter
from robo_cleaner.export.reporter import Reporter, describe_outcome
from robo_cleaner.export.visualizer import Visualizer
from robo_cleaner.model.engine import SimulationEngine
from robo_cleaner.model.grid import CellType
from robo_cleaner.model.state import Outcome, RunResult


def small_engine(strategies=("perimeter",)):
    config = SimulationConfig(
        grid=GridConfig(width=4, height=3),
        agent=AgentConfig(energy=50, speed=100, start=(0, 0)),
        layout=LayoutConfig(
            dirt=[RegionSpec('points', {'coords': [(2, 0), (1, 1)]})],
            obstacles=[RegionSpec('points', {'coords': [(2, 1)]})],
        ),
        strategies=list(strategies),
    )
    return SimulationEngine(config)


def test_render_grid_uses_legend_symbols():
    cells = np.array([
        [CellType.EMPTY, CellType.DIRT, CellType.OBSTACLE],
        [CellType.CLEANED, CellType.EMPTY, CellType.DIRT],
    ], dtype=np.int8)

    text = render_grid(cells, (2, 1))

    assert text == ". D #\nC . R"


def test_agent_symbol_wins_over_cell():
    cells = np.full((1, 2), CellType.DIRT, dtype=np.int8)
    assert render_grid(cells, (0, 0)) == "R D"


def test_console_renderer_draws_each_state():
    engine = small_engine()
    stream = io.StringIO()
    renderer = ConsoleRenderer(stream=stream, clear=False)
    engine.add_observer(renderer.update)

    engine.run()

    output = stream.getvalue()
    assert renderer.frames_drawn == engine.current_step
    assert "Legend: #=Obstacle" in output
    assert "\033[2J" not in output
    assert output.rstrip().endswith("dirt left=1")


def test_csv_writer_logs_every_event(tmp_path):
    engine = small_engine()
    path = tmp_path / "logs" / "simulation_log.csv"

    with CSVWriter(path) as writer:
        engine.add_observer(writer.append)
        engine.run()

    with open(path, newline='') as f:
        rows = list(csv.DictReader(f))

    assert len(rows) == engine.current_step
    assert rows[0] == {
        'step': '1', 'event': 'moved', 'strategy': 'perimeter',
        'x': '1', 'y': '0', 'energy': '49', 'dirt_remaining': '2',
    }
    cleaned = [r for r in rows if r['event'] == 'cleaned']
    assert [(r['x'], r['y']) for r in cleaned] == [('2', '0')]


def test_reporter_summary_lists_legs(tmp_path):
    engine = small_engine(strategies=("perimeter", "spiral"))
    reporter = Reporter("room.yaml", seed=7)
    engine.add_observer(reporter.update)
    results = engine.run()

    report = reporter.generate_summary(
        results, engine.snapshot(), tmp_path,
        csv_enabled=True, snapshot_enabled=False, gif_enabled=False)

    assert "Configuration: room.yaml" in report
    assert "Random Seed: 7" in report
    assert "1. Perimeter Hugger" in report
    assert "2. Spiral" in report
    # Perimeter picks up (2, 0); the spiral's second step lands on (1, 1)
    assert "Dirt Cleaned:          2 / 2 (100.0%)" in report
    assert "2. Spiral stopped: hit boundary or obstacle" in report
    assert "Snapshot:   (disabled)" in report
    assert "Logged Events:         13 moved, 2 cleaned" in report
    assert reporter.events == {"moved": 13, "cleaned": 2}
    assert reporter.first_clean_step < reporter.last_clean_step


def test_describe_outcome():
    result = RunResult(strategy="s_pattern", outcome=Outcome.ENERGY_EXHAUSTED,
                       moves=3, cells_cleaned=0, energy_start=3, energy_end=0)
    assert describe_outcome(result) == "S-Pattern stopped: battery depleted"


def test_visualizer_writes_snapshot_and_gif(tmp_path):
    engine = small_engine()
    visualizer = Visualizer(4, 3, record_frames=True, frame_every=4)
    engine.add_observer(visualizer.update)
    engine.run()

    assert len(visualizer.trail) == engine.agent.moves_made
    assert len(visualizer.frames) == engine.current_step // 4

    png = tmp_path / "final_state.png"
    visualizer.save_snapshot(engine.snapshot(), png)
    assert png.stat().st_size > 0

    gif = tmp_path / "simulation.gif"
    visualizer.generate_gif(gif, fps=5)
    assert gif.exists()



def test_visualizer_without_recording_buffers_nothing():
    engine = small_engine()
    visualizer = Visualizer(4, 3)
    engine.add_observer(visualizer.update)
    engine.run()
    assert visualizer.frames == []
    assert visualizer.trail
