"""Tests for the command-line entry point."""

import json

from bigs.cli import build_parser, main


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert (args.numvar, args.numconst, args.vardegree, args.constdegree) == (
            3,
            3,
            3,
            3,
        )
        assert args.rngseed is None
        assert args.output is None

    def test_short_flags(self):
        args = build_parser().parse_args(
            ["-n", "10", "-m", "6", "-v", "3", "-c", "5", "-r", "9"]
        )
        assert (args.numvar, args.numconst, args.vardegree, args.constdegree) == (
            10,
            6,
            3,
            5,
        )
        assert args.rngseed == 9


class TestMain:
    def test_prints_summary(self, capsys):
        assert main(["-n", "10", "-m", "6", "-v", "3", "-c", "5", "-r", "1"]) == 0
        out = capsys.readouterr().out
        assert "Number of variables: 10" in out
        assert "Rng seed: 1" in out
        assert "\n9: " in out

    def test_same_seed_same_output(self, capsys):
        main(["-n", "10", "-m", "6", "-v", "3", "-c", "5", "-r", "3"])
        first = capsys.readouterr().out.split("Graph\n-----")[1]
        main(["-n", "10", "-m", "6", "-v", "3", "-c", "5", "-r", "3"])
        second = capsys.readouterr().out.split("Graph\n-----")[1]
        assert first == second

    def test_invalid_parameters_exit_code(self, capsys):
        assert main(["-n", "3", "-m", "2", "-v", "2", "-c", "2"]) == 1
        err = capsys.readouterr().err
        assert "Can't build a regular graph" in err
        assert "n = 3 (number of variables)" in err

    def test_negative_seed_rejected(self, capsys):
        assert main(["-r", "-5"]) == 1
        assert "non-negative" in capsys.readouterr().err

    def test_saves_json(self, tmp_path, capsys):
        path = tmp_path / "graph.json"
        assert main(["-n", "4", "-m", "4", "-v", "2", "-c", "2", "-r", "8",
                     "-o", str(path)]) == 0
        assert "Saved output to" in capsys.readouterr().out
        data = json.loads(path.read_text())
        assert data["rng_seed"] == 8
        assert len(data["variable_neighbors"]) == 4
