import subprocess
import sys
from pathlib import Path

import pytest

from app.services.patch_format import PatchRecord
from app.services.storage import load_patch
from tools.patchit import ApplyCommand, GenerateCommand, UsageError, build_parser, main, to_command

from conftest import MODIFIED, ORIGINAL


def parse(argv):
    return to_command(build_parser().parse_args(argv))


class TestParse:
    def test_generate_long_flags(self):
        assert parse(["--source", "a", "--modified", "b", "--output", "c.json"]) == \
            GenerateCommand("a", "b", "c.json")

    def test_generate_short_flags_and_equals_form(self):
        assert parse(["-s", "a", "-m", "b"]) == GenerateCommand("a", "b", None)
        assert parse(["--source=a", "--modified=b"]) == GenerateCommand("a", "b", None)

    def test_apply(self):
        assert parse(["patch.json"]) == ApplyCommand("patch.json")

    def test_generate_needs_both_files(self):
        with pytest.raises(UsageError):
            parse(["-s", "a"])

    def test_nothing_given(self):
        with pytest.raises(UsageError):
            parse([])


class TestMain:
    def test_help_exits_zero(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--help"])
        assert exc.value.code == 0
        assert "--source" in capsys.readouterr().out

    def test_missing_arguments(self, capsys):
        assert main([]) == 1
        assert capsys.readouterr().err.startswith("Error: Missing required arguments")

    def test_generate_and_apply(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "app.old").write_bytes(ORIGINAL)
        (tmp_path / "app").write_bytes(MODIFIED)

        assert main(["-s", "app.old", "-m", "app"]) == 0
        assert "Patch file successfully generated: app.json" in capsys.readouterr().out
        assert load_patch(tmp_path / "app.json").patches == (PatchRecord(offset=1, data="ff"),)

        # el destino todavía tiene el contenido original
        (tmp_path / "app").write_bytes(ORIGINAL)
        assert main(["app.json"]) == 0
        assert "Patches applied successfully." in capsys.readouterr().out
        assert (tmp_path / "app").read_bytes() == MODIFIED

    def test_generate_size_mismatch(self, tmp_path, capsys):
        (tmp_path / "a").write_bytes(ORIGINAL)
        (tmp_path / "b").write_bytes(ORIGINAL[:2])
        out = tmp_path / "p.json"
        assert main(["-s", str(tmp_path / "a"), "-m", str(tmp_path / "b"), "-o", str(out)]) == 1
        assert "same size" in capsys.readouterr().err
        assert not out.exists()

    def test_apply_checksum_mismatch(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "app.old").write_bytes(ORIGINAL)
        (tmp_path / "app").write_bytes(MODIFIED)
        assert main(["-s", "app.old", "-m", "app"]) == 0
        capsys.readouterr()

        # 'app' contiene ya la versión modificada
        assert main(["app.json"]) == 1
        assert "Invalid checksum" in capsys.readouterr().err
        assert (tmp_path / "app").read_bytes() == MODIFIED

    def test_apply_missing_patch_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.json")]) == 1
        assert "missing.json" in capsys.readouterr().err


def test_runs_as_module_from_repo_root():
    root = Path(__file__).resolve().parents[1]
    r = subprocess.run(
        [sys.executable, "-m", "tools.patchit", "--help"],
        cwd=root, capture_output=True, text=True,
    )
    assert r.returncode == 0
    assert "--modified" in r.stdout
