import pytest

from dejong_demo import main, parse_args


def test_parse_args_defaults():
    args = parse_args([])
    assert args.benchmark == "f1"
    assert (args.population, args.iterations, args.seed) == (50, 500, 42)
    assert not args.maximize and not args.no_plot


def test_parse_args_rejects_unknown_benchmark():
    with pytest.raises(SystemExit):
        parse_args(["f42"])


def test_headless_run_reports_result(capsys):
    main(["f6", "--population", "8", "--iterations", "5", "--no-plot"])
    out = capsys.readouterr().out
    assert "Best position:" in out
    assert "Known optimum:" in out


def test_headless_run_without_known_optimum(capsys):
    main(["custom", "--population", "4", "--iterations", "2", "--no-plot"])
    assert "not defined for CustomFunction" in capsys.readouterr().out
