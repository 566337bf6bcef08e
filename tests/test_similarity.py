import pytest

from lot_matcher.comparison.similarity import keyword_overlap, match_percentage


def test_keyword_overlap_empty_keyword_sets_score_zero():
    assert keyword_overlap("Batch: AB123456", []) == 0.0
    assert keyword_overlap("Batch: AB123456", ["", ""]) == 0.0
    assert keyword_overlap("", []) == 0.0


def test_keyword_overlap_is_character_set_jaccard():
    # {a,t,c,h} shared; union = 14 distinct line chars + "b"
    assert keyword_overlap("Batch: AB123456", ["batch"]) == pytest.approx(400 / 15)
    assert keyword_overlap("batch", ["batch"]) == 100.0


def test_keyword_overlap_takes_best_keyword():
    assert keyword_overlap("lot", ["batch", "lot", "p.o."]) == 100.0


def test_keyword_overlap_is_case_sensitive():
    assert keyword_overlap("VEND", ["vend"]) == 0.0
    assert keyword_overlap("vend", ["vend"]) == 100.0


@pytest.mark.parametrize("line", ["", "x", "Batch: AB123456", "P.O. 4500012345", "???"])
def test_keyword_overlap_bounds(line):
    score = keyword_overlap(line, ["batch", "lot", "p.o."])
    assert 0.0 <= score <= 100.0


def test_match_percentage_one_differing_character():
    assert match_percentage("XYZ987654321", "XYZ987654322") == 91


def test_match_percentage_identical_and_empty():
    assert match_percentage("ABC12345", "ABC12345") == 100
    assert match_percentage("", "") == 0
    assert match_percentage("ABC", "") == 0


def test_match_percentage_divides_by_longer_string():
    assert match_percentage("ABC", "ABCD") == 75
    assert match_percentage("ABCD", "ABC") == 75


def test_match_percentage_is_positional_not_edit_distance():
    # One leading character shifts every position
    assert match_percentage("0ABCDEFGH", "ABCDEFGH") == 0
    assert match_percentage("AB", "BA") == 0
