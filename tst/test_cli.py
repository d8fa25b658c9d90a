"""Tests for the command-line interface."""

from typer.testing import CliRunner

from siglent_converter.cli import app

runner = CliRunner()


class TestConvertCommand:
    def test_convert(self, capture_file, tmp_path):
        output = tmp_path / "out.csv"
        result = runner.invoke(app, ["convert", str(capture_file), str(output)])

        assert result.exit_code == 0
        assert "Wrote 4 rows" in result.output
        assert "CH1 - Vertical offset 0.000000 V" in result.output
        assert "CH2 - Vertical offset" in result.output
        assert "CH3" not in result.output
        assert output.read_text().count("\n") == 4

    def test_wide_layout(self, capture_file, tmp_path):
        output = tmp_path / "out.csv"
        result = runner.invoke(app, ["convert", str(capture_file), str(output), "--layout", "wide", "-w", "2"])

        assert result.exit_code == 0
        assert len(output.read_bytes()) == 4 * 46

    def test_strict_overflow_fails(self, tmp_path, capture_builder):
        capture = tmp_path / "big.bin"
        capture.write_bytes(capture_builder({n: bytes([0, 255]) for n in (1, 2, 3)}, volts_per_div=10.0))
        output = tmp_path / "out.csv"

        result = runner.invoke(app, ["convert", str(capture), str(output), "--strict"])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert "CH3 - Vertical offset" in result.output
        assert not output.exists()

    def test_truncation_warning(self, tmp_path, capture_builder):
        capture = tmp_path / "three.bin"
        capture.write_bytes(capture_builder({n: bytes([128, 128]) for n in (1, 2, 3)}))
        output = tmp_path / "out.csv"

        result = runner.invoke(app, ["convert", str(capture), str(output)])

        assert result.exit_code == 0
        assert "2 rows were truncated" in result.output

    def test_no_channels(self, empty_header_file, tmp_path):
        output = tmp_path / "out.csv"
        result = runner.invoke(app, ["convert", str(empty_header_file), str(output)])

        assert result.exit_code == 1
        assert "No analog channels" in result.output
        assert not output.exists()

    def test_output_directory_missing(self, capture_file, tmp_path):
        output = tmp_path / "missing" / "out.csv"
        result = runner.invoke(app, ["convert", str(capture_file), str(output)])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert "Sample rate" in result.output
        assert not output.parent.exists()

    def test_too_many_workers(self, capture_file, tmp_path):
        result = runner.invoke(app, ["convert", str(capture_file), str(tmp_path / "out.csv"), "-w", "100000"])
        assert result.exit_code != 0
        assert not (tmp_path / "out.csv").exists()

    def test_missing_input(self, tmp_path):
        result = runner.invoke(app, ["convert", str(tmp_path / "missing.bin")])
        assert result.exit_code != 0


class TestInfoCommand:
    def test_info(self, capture_file):
        result = runner.invoke(app, ["info", str(capture_file)])

        assert result.exit_code == 0
        assert "Samples per channel: 4" in result.output
        assert "1000000000.000000 Hz" in result.output
        assert "CH2 - Volts/div 1.000000 V" in result.output

    def test_info_short_file(self, tmp_path):
        path = tmp_path / "short.bin"
        path.write_bytes(b"\x00" * 16)
        result = runner.invoke(app, ["info", str(path)])

        assert result.exit_code == 1
        assert "at least 2048 bytes" in result.output


class TestFormatInfoCommand:
    def test_format_info(self):
        result = runner.invoke(app, ["format-info"])

        assert result.exit_code == 0
        assert "Header: 2048 bytes" in result.output
        assert "reference: 27/35/43/51" in result.output
        assert "wide: 32/46/60/74" in result.output
