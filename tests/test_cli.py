import io

import pytest

from lot_matcher.cli import main


@pytest.fixture(autouse=True)
def no_tty(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_matching_pair_is_logged_and_exported(tmp_path, capsys):
    vendor = _write(tmp_path, "vendor.txt", "Batch: XYZ987654321\n")
    inhouse = _write(tmp_path, "inhouse.txt", "Vend: XYZ987654322\n")
    csv_path = tmp_path / "matches.csv"

    assert main([vendor, inhouse, "--csv", str(csv_path)]) == 0

    out = capsys.readouterr().out
    assert "Match Percentage: 91% (partial)" in out
    lines = csv_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Time,Vendor,Inhouse"
    assert lines[1].endswith(",XYZ987654321,XYZ987654322")


def test_mismatched_pair_fails(tmp_path):
    vendor = _write(tmp_path, "vendor.txt", "Batch: AAAA11111111")
    inhouse = _write(tmp_path, "inhouse.txt", "Vend: BBBB22222222")
    assert main([vendor, inhouse]) == 1


def test_ambiguous_label_without_operator_fails(tmp_path, capsys):
    vendor = _write(tmp_path, "vendor.txt", "XYZ1234567890\nQRS0987654321")
    inhouse = _write(tmp_path, "inhouse.txt", "Vend: XYZ987654322")
    assert main([vendor, inhouse]) == 1
    assert "Several possible codes found" in capsys.readouterr().out


def test_missing_file_fails(tmp_path):
    inhouse = _write(tmp_path, "inhouse.txt", "Vend: XYZ987654322")
    assert main([str(tmp_path / "missing.txt"), inhouse]) == 1


def test_unpaired_paths_are_rejected(tmp_path):
    vendor = _write(tmp_path, "vendor.txt", "Batch: XYZ987654321")
    with pytest.raises(SystemExit) as exc:
        main([vendor])
    assert exc.value.code == 2


def test_unknown_pattern_is_rejected(tmp_path):
    vendor = _write(tmp_path, "vendor.txt", "Batch: XYZ987654321")
    inhouse = _write(tmp_path, "inhouse.txt", "Vend: XYZ987654322")
    with pytest.raises(SystemExit):
        main([vendor, inhouse, "--pattern", "bogus"])
