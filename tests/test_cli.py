"""Tests for the command line entry point."""

import pytest
from PIL import Image

from py_terrain import cli


class TestCli:
    """Test world generation from the command line."""

    def test_generates_image_and_preview(self, tmp_path, capsys):
        output = tmp_path / "world_map.png"
        exit_code = cli.main(["--size", "17", "--seed", "42", "--output", str(output)])

        assert exit_code == 0
        with Image.open(output) as image:
            assert image.size == (17, 17)

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 17
        assert all(len(line) == 17 for line in lines)

    def test_no_preview(self, tmp_path, capsys):
        output = tmp_path / "world.png"
        exit_code = cli.main(
            ["--size", "9", "--seed", "3", "--output", str(output), "--no-preview"]
        )

        assert exit_code == 0
        assert output.exists()
        assert capsys.readouterr().out == ""

    def test_same_seed_same_image(self, tmp_path):
        first = tmp_path / "a.png"
        second = tmp_path / "b.png"
        cli.main(["--size", "33", "--seed", "tundra", "--output", str(first), "--no-preview"])
        cli.main(["--size", "33", "--seed", "tundra", "--output", str(second), "--no-preview"])

        with Image.open(first) as a, Image.open(second) as b:
            assert list(a.getdata()) == list(b.getdata())

    def test_invalid_size_exit_code(self, tmp_path):
        output = tmp_path / "world.png"
        exit_code = cli.main(["--size", "10", "--output", str(output)])

        assert exit_code == 2
        assert not output.exists()

    def test_invalid_roughness_exit_code(self, tmp_path):
        output = tmp_path / "world.png"
        assert cli.main(["--size", "9", "--roughness", "3", "--output", str(output)]) == 2

    @pytest.mark.parametrize("flag, value", [("--max-height", "inf"), ("--sea-level", "nan")])
    def test_non_finite_heights_exit_code(self, tmp_path, flag, value):
        output = tmp_path / "world.png"
        exit_code = cli.main(["--size", "9", "--seed", "1", flag, value, "--output", str(output)])

        assert exit_code == 2
        assert not output.exists()

    @pytest.mark.parametrize("raw, expected", [("42", 42), ("-7", -7), ("mesa", "mesa"), (None, None), (5, 5)])
    def test_parse_seed(self, raw, expected):
        assert cli._parse_seed(raw) == expected
