"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest
import yaml

from robo_cleaner.config import default_config, load_config, validate_strategies

DEMO_CONFIG = Path(__file__).resolve().parent.parent / "configs" / "demo.yaml"


def write_config(tmp_path, data):
    path = tmp_path / "room.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


def test_load_full_config(tmp_path):
    path = write_config(tmp_path, {
        'grid': {'width': 6, 'height': 4},
        'agent': {'energy': 50, 'speed': 80, 'start': [1, 2]},
        'layout': {
            'dirt': [
                {'type': 'points', 'coords': [[0, 0], [5, 3]]},
                {'type': 'random', 'count': 3},
            ],
            'obstacles': [
                {'type': 'rectangle', 'x': 2, 'y': 0, 'width': 1, 'height': 2},
            ],
        },
        'simulation': {'strategies': ['spiral', 'random_walk'],
                       'recharge_between': False, 'seed': 3},
        'export': {'csv': False, 'gif': True, 'render': True},
    })

    config = load_config(path)

    assert (config.grid.width, config.grid.height) == (6, 4)
    assert config.agent.energy == 50
    assert config.agent.speed == 80
    assert config.agent.start == (1, 2)
    assert config.layout.dirt[0].data['coords'] == [(0, 0), (5, 3)]
    assert config.layout.dirt[1].data == {'count': 3}
    assert config.layout.obstacles[0].region_type == 'rectangle'
    assert config.strategies == ['spiral', 'random_walk']
    assert config.recharge_between is False
    assert config.seed == 3
    assert config.csv_enabled is False
    assert config.snapshot_enabled is True
    assert config.gif_enabled is True
    assert config.render is True


def test_minimal_config_uses_defaults(tmp_path):
    config = load_config(write_config(tmp_path, {'grid': {'width': 3, 'height': 3}}))
    assert config.agent.energy == 200
    assert config.agent.start == (0, 0)
    assert config.strategies == ['random']
    assert config.layout.dirt == []
    assert config.pacing is False


def test_single_strategy_string_is_accepted(tmp_path):
    config = load_config(write_config(tmp_path, {
        'grid': {'width': 3, 'height': 3},
        'simulation': {'strategies': 'perimeter'},
    }))
    assert config.strategies == ['perimeter']


@pytest.mark.parametrize("layout", [
    {'obstacles': [{'type': 'circle', 'coords': [[1, 1]]}]},
    {'obstacles': [{'type': 'random', 'count': 2}]},
])
def test_bad_region_type_raises(tmp_path, layout):
    path = write_config(tmp_path, {'grid': {'width': 3, 'height': 3}, 'layout': layout})
    with pytest.raises(ValueError, match="Unknown region type"):
        load_config(path)


def test_unknown_strategy_raises(tmp_path):
    path = write_config(tmp_path, {
        'grid': {'width': 3, 'height': 3},
        'simulation': {'strategies': ['zigzag']},
    })
    with pytest.raises(ValueError, match="zigzag"):
        load_config(path)


def test_bad_grid_size_raises(tmp_path):
    path = write_config(tmp_path, {'grid': {'width': 0, 'height': 3}})
    with pytest.raises(ValueError):
        load_config(path)


def test_validate_strategies_needs_one():
    with pytest.raises(ValueError):
        validate_strategies([])
    assert validate_strategies(['random', 's_pattern']) == ['random', 's_pattern']


def test_default_config_is_demo_room():
    config = default_config()
    assert (config.grid.width, config.grid.height) == (10, 10)
    assert config.agent.energy == 200
    assert config.agent.speed == 250
    assert config.layout.obstacles[0].data['coords'] == [(3, 2), (5, 5)]


def test_shipped_demo_config_loads():
    config = load_config(DEMO_CONFIG)
    assert config.strategies == ['perimeter', 's_pattern']
    assert config.seed == 42
