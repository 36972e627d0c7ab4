import re
from datetime import datetime

INPUT_FORMAT = "%Y-%m-%d-%H:%M:%S"
INPUT_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}-\d{2}:\d{2}:\d{2}")

def convert_to_iso8601(date_string: str) -> str:
    """
    Convert 'YYYY-MM-DD-HH:MM:SS' (UTC) to 'YYYY-MM-DDTHH:MM:SS.sssZ'.

    Raises ValueError if the string does not match the pattern exactly
    (zero-padded fields) or is not a real calendar date (e.g. 2024-02-30).
    """
    if not isinstance(date_string, str) or not INPUT_PATTERN.fullmatch(date_string):
        raise ValueError(f"Invalid date '{date_string}', expected YYYY-MM-DD-HH:MM:SS")

    try:
        dt = datetime.strptime(date_string, INPUT_FORMAT)
    except ValueError as e:
        raise ValueError(f"Invalid date '{date_string}': {e}") from e

    # Input has whole seconds only
    return dt.strftime("%Y-%m-%dT%H:%M:%S.000Z")
