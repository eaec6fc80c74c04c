"""Tests for pepcharge.analysis.pka_table."""

import dataclasses

import pytest

from pepcharge import ConfigurationLoadError
from pepcharge.analysis.pka_table import CANONICAL, SIDE_CHAIN, default_table, load_table


def _write(tmp_path, text):
    path = tmp_path / "pka.csv"
    path.write_text(text, encoding="utf-8")
    return path


def _replace_line(text, aa, new):
    return "\n".join(new if line.startswith(f"{aa};") else line for line in text.splitlines()) + "\n"


class TestDefaultTable:
    def test_has_twenty_canonical_residues(self, table):
        assert set(table) == CANONICAL
        assert len(table) == 20

    def test_side_chain_pka_only_for_ionizable_residues(self, table):
        for aa, c in table.items():
            assert (c.pkr is not None) == (aa in SIDE_CHAIN)

    def test_bjellqvist_values(self, table):
        assert table["R"].pkr == pytest.approx(12.0)
        assert table["H"].pkr == pytest.approx(5.98)
        assert table["P"].pk2 == pytest.approx(8.36)
        assert table["E"].pk1 == pytest.approx(4.75)
        assert table["G"].pk1 == pytest.approx(3.55)
        assert table["G"].pk2 == pytest.approx(7.50)

    def test_loaded_once(self):
        assert default_table() is default_table()

    def test_read_only(self, table):
        with pytest.raises(TypeError):
            table["A"] = table["G"]
        with pytest.raises(dataclasses.FrozenInstanceError):
            table["A"].pk1 = 0.0


class TestLoadErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationLoadError):
            load_table(tmp_path / "nope.csv")

    def test_empty_file(self, tmp_path):
        with pytest.raises(ConfigurationLoadError):
            load_table(_write(tmp_path, ""))

    def test_missing_residue(self, tmp_path, table_text):
        text = "\n".join(l for l in table_text.splitlines() if not l.startswith("W;"))
        with pytest.raises(ConfigurationLoadError, match="W"):
            load_table(_write(tmp_path, text))

    def test_duplicate_residue(self, tmp_path, table_text):
        with pytest.raises(ConfigurationLoadError, match="duplicados"):
            load_table(_write(tmp_path, table_text + "A;3,55;7,59;\n"))

    def test_unknown_residue(self, tmp_path, table_text):
        with pytest.raises(ConfigurationLoadError):
            load_table(_write(tmp_path, table_text + "X;3,55;7,50;\n"))

    def test_non_numeric_pka(self, tmp_path, table_text):
        text = _replace_line(table_text, "G", "G;abc;7,50;")
        with pytest.raises(ConfigurationLoadError):
            load_table(_write(tmp_path, text))

    def test_missing_side_chain_pka(self, tmp_path, table_text):
        text = _replace_line(table_text, "K", "K;3,55;7,50;")
        with pytest.raises(ConfigurationLoadError, match="K"):
            load_table(_write(tmp_path, text))

    def test_unexpected_side_chain_pka(self, tmp_path, table_text):
        text = _replace_line(table_text, "A", "A;3,55;7,59;6,00")
        with pytest.raises(ConfigurationLoadError, match="A"):
            load_table(_write(tmp_path, text))

    def test_missing_column(self, tmp_path):
        with pytest.raises(ConfigurationLoadError, match="colunas"):
            load_table(_write(tmp_path, "aa;pk1;pk2\nA;3,55;7,59\n"))

    def test_shipped_file_loads(self, tmp_path, table_text):
        assert len(load_table(_write(tmp_path, table_text))) == 20


class TestStartupLoad:
    def test_table_cached_at_import(self):
        assert default_table.cache_info().currsize == 1

    def test_broken_table_fails_at_import(self, tmp_path):
        import os
        import subprocess
        import sys
        from pathlib import Path

        root = Path(__file__).resolve().parents[1]
        env = dict(os.environ,
                   PEPCHARGE_PKA_TABLE=str(tmp_path / "nope.csv"),
                   PYTHONPATH=os.pathsep.join(filter(None, [str(root), os.environ.get("PYTHONPATH")])))
        proc = subprocess.run([sys.executable, "-c", "import pepcharge"],
                              cwd=tmp_path, env=env, capture_output=True, text=True)

        assert proc.returncode != 0
        assert "ConfigurationLoadError" in proc.stderr
