import pytest
from cax.utils import convert_to_iso8601

def test_convert_basic():
    assert convert_to_iso8601("2024-01-02-03:04:05") == "2024-01-02T03:04:05.000Z"

def test_convert_end_of_year():
    assert convert_to_iso8601("2023-12-31-23:59:59") == "2023-12-31T23:59:59.000Z"

def test_convert_leap_day():
    assert convert_to_iso8601("2024-02-29-00:00:00") == "2024-02-29T00:00:00.000Z"

@pytest.mark.parametrize("bad", [
    "2024-01-02T03:04:05",   # already ISO, wrong separator
    "2024/01/02-03:04:05",
    "2024-01-02 03:04:05",
    "2023-02-29-00:00:00",   # not a leap year
    "2024-13-01-00:00:00",
    "2024-01-02-25:00:00",
    "",
    "yesterday",
    "2024-1-2-3:4:5",        # unpadded fields
    "2024-01- 2-03:04:05",   # space-padded day
    "2024-01-02-3:04:05",    # unpadded hour
    "2024-01-02-03:04:05Z",  # trailing suffix
])
def test_convert_rejects_malformed(bad):
    with pytest.raises(ValueError):
        convert_to_iso8601(bad)
