"""End-to-end tests for the command line entry point."""

from robo_cleaner.main import main, parse_args


def test_parse_args_defaults():
    args = parse_args([])
    assert args.config is None
    assert args.strategy is None
    assert args.csv is None
    assert args.gif is False


def test_quiet_run_without_exports(tmp_path, capsys):
    code = main(['--quiet', '--no-csv', '--no-snapshot',
                 '--strategy', 'spiral', '--seed', '1',
                 '--out-dir', str(tmp_path)])

    assert code == 0
    assert capsys.readouterr().out == ""
    assert list(tmp_path.iterdir()) == []


def test_run_writes_csv_snapshot_and_report(tmp_path, capsys):
    code = main(['--strategy', 'perimeter', 's_pattern', '--energy', '60',
                 '--seed', '2', '--out-dir', str(tmp_path)])

    assert code == 0
    out = capsys.readouterr().out
    assert "Grid: 10x10" in out
    assert "Selected strategy: Perimeter Hugger" in out
    assert "ROBOT CLEANER SIMULATION REPORT" in out
    assert (tmp_path / 'simulation_log.csv').exists()
    assert (tmp_path / 'final_state.png').exists()


def test_missing_config_file_fails(tmp_path, capsys):
    code = main(['--config', str(tmp_path / 'nope.yaml'), '--quiet'])
    assert code == 1
    assert "not found" in capsys.readouterr().err


def test_unknown_strategy_fails(capsys):
    code = main(['--strategy', 'zigzag', '--quiet'])
    assert code == 1
    assert "zigzag" in capsys.readouterr().err


def test_bad_speed_fails(tmp_path, capsys):
    code = main(['--speed', '0', '--quiet', '--out-dir', str(tmp_path)])
    assert code == 1
    assert "Speed must be greater than zero" in capsys.readouterr().err
