"""Configuration dataclasses and YAML loader for the cleaning simulation."""

from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Any, Optional
from pathlib import Path
import yaml

from robo_cleaner.model.strategies import RANDOM_STRATEGY, STRATEGY_NAMES


@dataclass
class GridConfig:
    width: int
    height: int


@dataclass
class AgentConfig:
    energy: int = 200
    speed: int = 150                   # pacing delay in milliseconds
    start: Tuple[int, int] = (0, 0)


@dataclass
class RegionSpec:
    region_type: str  # "points", "rectangle" or "random"
    data: Dict[str, Any]


@dataclass
class LayoutConfig:
    dirt: List[RegionSpec] = field(default_factory=list)
    obstacles: List[RegionSpec] = field(default_factory=list)


@dataclass
class SimulationConfig:
    grid: GridConfig
    agent: AgentConfig
    layout: LayoutConfig
    strategies: List[str] = field(default_factory=lambda: [RANDOM_STRATEGY])
    recharge_between: bool = True
    pacing: bool = False

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    render: bool = False
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))


def _parse_regions(regions_raw: List[Dict], allow_random: bool) -> List[RegionSpec]:
    """Parse dirt or obstacle region specifications from raw YAML data."""
    regions = []
    for r in regions_raw:
        region_type = r.get('type', 'points')
        if region_type == 'rectangle':
            data = {
                'x': r['x'],
                'y': r['y'],
                'width': r['width'],
                'height': r['height']
            }
        elif region_type == 'points':
            data = {'coords': [tuple(c) for c in r['coords']]}
        elif region_type == 'random' and allow_random:
            data = {'count': int(r['count'])}
        else:
            raise ValueError(f"Unknown region type: {region_type}")
        regions.append(RegionSpec(region_type=region_type, data=data))
    return regions


def validate_strategies(names: List[str]) -> List[str]:
    """Check strategy names against the registry (plus 'random')."""
    if not names:
        raise ValueError("At least one strategy must be configured")
    allowed = STRATEGY_NAMES + (RANDOM_STRATEGY,)
    for name in names:
        if name not in allowed:
            raise ValueError(
                f"Unknown strategy: {name} (choose from {', '.join(allowed)})")
    return list(names)


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f)

    # Parse grid config
    grid = GridConfig(
        width=raw['grid']['width'],
        height=raw['grid']['height']
    )
    if grid.width <= 0 or grid.height <= 0:
        raise ValueError(f"Grid size must be positive: {grid.width}x{grid.height}")

    # Parse agent config
    agent_raw = raw.get('agent', {})
    agent = AgentConfig(
        energy=agent_raw.get('energy', 200),
        speed=agent_raw.get('speed', 150),
        start=tuple(agent_raw.get('start', (0, 0)))
    )

    # Parse layout
    layout_raw = raw.get('layout', {})
    layout = LayoutConfig(
        dirt=_parse_regions(layout_raw.get('dirt', []), allow_random=True),
        obstacles=_parse_regions(layout_raw.get('obstacles', []), allow_random=False)
    )

    # Parse simulation config
    sim_raw = raw.get('simulation', {})
    strategies = sim_raw.get('strategies', [RANDOM_STRATEGY])
    if isinstance(strategies, str):
        strategies = [strategies]

    # Parse export config (optional)
    export_raw = raw.get('export', {})

    return SimulationConfig(
        grid=grid,
        agent=agent,
        layout=layout,
        strategies=validate_strategies(strategies),
        recharge_between=sim_raw.get('recharge_between', True),
        pacing=sim_raw.get('pacing', False),
        csv_enabled=export_raw.get('csv', True),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False),
        render=export_raw.get('render', False),
        seed=sim_raw.get('seed')
    )


def default_config() -> SimulationConfig:
    """The stock 10x10 demo room used when no config file is given."""
    return SimulationConfig(
        grid=GridConfig(width=10, height=10),
        agent=AgentConfig(energy=200, speed=250, start=(0, 0)),
        layout=LayoutConfig(
            dirt=[RegionSpec('points', {'coords': [(2, 3), (6, 2), (3, 1), (7, 9)]})],
            obstacles=[RegionSpec('points', {'coords': [(3, 2), (5, 5)]})]
        ),
        strategies=[RANDOM_STRATEGY]
    )
