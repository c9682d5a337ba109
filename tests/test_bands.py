import pytest

from x32_portnamer.bands import BandTable

TABLE = BandTable([
    (0, "off", 0),
    (4, "low", 1),
    (9, "high", 7),
])


@pytest.mark.parametrize("code, expected", [
    (0, ("off", 0)),
    (1, ("low", 0)),
    (4, ("low", 3)),
    (7, ("high", 0)),
    (9, ("high", 2)),
])
def test_classify(code, expected):
    assert TABLE.classify(code) == expected


@pytest.mark.parametrize("code", [None, -1, 5, 6, 10, 1000])
def test_unclassified_codes(code):
    assert TABLE.classify(code) is None


def test_rows_must_be_ascending():
    with pytest.raises(ValueError):
        BandTable([(5, "a", 0), (3, "b", 4)])


def test_base_above_upper_is_rejected():
    with pytest.raises(ValueError):
        BandTable([(5, "a", 6)])
