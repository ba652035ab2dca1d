"""Tests for the headless command line host."""

import pytest

from chip8.cli import main


def write_rom(tmp_path, *words):
    path = tmp_path / "test.ch8"
    path.write_bytes(b"".join(w.to_bytes(2, "big") for w in words))
    return path


class TestCLI:
    """chip8-run tests."""

    def test_prints_screen_and_registers(self, tmp_path, capsys):
        path = write_rom(tmp_path, 0xA050, 0xD005, 0x1204)
        assert main([str(path), "--ticks", "1"]) == 0
        out = capsys.readouterr().out.split("\n")
        assert out[0] == "####" + "." * 60
        assert out[1] == "#..#" + "." * 60
        assert out[32].startswith("PC=204 I=050 SP=0 DT=0 ST=0")

    def test_trace(self, tmp_path, capsys):
        path = write_rom(tmp_path, 0x6005, 0x1202)
        assert main([str(path), "--ticks", "1", "--ipt", "2", "--trace"]) == 0
        out = capsys.readouterr().out
        assert "200: 6005" in out
        assert "202: 1202" in out

    def test_keys(self, tmp_path, capsys):
        path = write_rom(tmp_path, 0xF10A, 0x1202)
        assert main([str(path), "--ticks", "1", "--keys", "b"]) == 0
        out = capsys.readouterr().out
        assert "V=[00 0B" in out

    def test_invalid_opcode_exit_status(self, tmp_path, capsys):
        path = write_rom(tmp_path, 0xFFFF)
        assert main([str(path)]) == 1
        err = capsys.readouterr().err
        assert "InvalidOpcode" in err
        assert "0xFFFF" in err

    def test_rom_too_large(self, tmp_path, capsys):
        path = tmp_path / "big.ch8"
        path.write_bytes(bytes(4000))
        assert main([str(path)]) == 1
        assert "maximum" in capsys.readouterr().err

    def test_missing_rom(self, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path / "nope.ch8")])
        assert excinfo.value.code == 2

    def test_bad_key(self, tmp_path):
        path = write_rom(tmp_path, 0x1200)
        with pytest.raises(SystemExit) as excinfo:
            main([str(path), "--keys", "1,G"])
        assert excinfo.value.code == 2

    def test_bad_ipt(self, tmp_path):
        path = write_rom(tmp_path, 0x1200)
        with pytest.raises(SystemExit) as excinfo:
            main([str(path), "--ipt", "0"])
        assert excinfo.value.code == 2

    def test_negative_ticks(self, tmp_path):
        path = write_rom(tmp_path, 0x1200)
        with pytest.raises(SystemExit) as excinfo:
            main([str(path), "--ticks", "-3"])
        assert excinfo.value.code == 2

    def test_zero_ticks(self, tmp_path, capsys):
        """Zero ticks prints the untouched initial state."""
        path = write_rom(tmp_path, 0x1200)
        assert main([str(path), "--ticks", "0"]) == 0
        assert "PC=200" in capsys.readouterr().out
