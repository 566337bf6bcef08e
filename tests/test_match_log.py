from lot_matcher.config import Config
from lot_matcher.models.session import MatchRecord
from lot_matcher.report.match_log import format_match_list, render_match_csv, write_match_csv


RECORDS = [
    MatchRecord(time="2024-05-02 09:14:03", vendor="XYZ987654321", inhouse="XYZ987654322"),
    MatchRecord(time="2024-05-02 09:20:41", vendor="AB12345678", inhouse="AB12345678"),
]


def test_render_header_only_for_empty_log():
    assert render_match_csv([]) == "Time,Vendor,Inhouse\n"


def test_render_rows_are_comma_joined_in_order():
    assert render_match_csv(RECORDS) == (
        "Time,Vendor,Inhouse\n"
        "2024-05-02 09:14:03,XYZ987654321,XYZ987654322\n"
        "2024-05-02 09:20:41,AB12345678,AB12345678\n"
    )


def test_write_skips_empty_log(tmp_path):
    assert write_match_csv([], tmp_path / "out.csv") is None
    assert not (tmp_path / "out.csv").exists()


def test_write_to_file_and_directory(tmp_path):
    target = write_match_csv(RECORDS, tmp_path / "nested" / "out.csv")
    assert target == tmp_path / "nested" / "out.csv"
    assert target.read_text(encoding="utf-8") == render_match_csv(RECORDS)

    default_target = write_match_csv(RECORDS, tmp_path)
    assert default_target == tmp_path / "match_data.csv"
    assert default_target.exists()


def test_format_match_list():
    assert format_match_list([]) == "MatchData list is empty."
    listing = format_match_list(RECORDS)
    assert listing.splitlines()[1] == (
        "Item 1: Time=2024-05-02 09:14:03, Vendor=XYZ987654321, Inhouse=XYZ987654322"
    )


def test_config_sets_header_and_default_filename(tmp_path):
    cfg = Config(csv_header=("When", "Supplier", "Ours"), csv_filename="lots.csv")
    assert render_match_csv(RECORDS[:1], cfg) == (
        "When,Supplier,Ours\n"
        "2024-05-02 09:14:03,XYZ987654321,XYZ987654322\n"
    )

    target = write_match_csv(RECORDS, tmp_path, config=cfg)
    assert target == tmp_path / "lots.csv"
    assert target.read_text(encoding="utf-8").startswith("When,Supplier,Ours\n")
