"""
Delimited-text reader for matrix uploads.

Pure Python implementation - NO Django imports.
Turns uploaded CSV bytes into rows of raw text tokens for the matrix engine.
"""

import csv
import io


class UpstreamInputError(Exception):
    """Raised when an upload cannot be read as delimited text."""

    pass


def read_records(data: bytes, delimiter: str = ",") -> list[list[str]]:
    """
    Parse CSV bytes into rows of raw fields.

    Fields are returned untrimmed and rows may differ in length; judging
    the shape is left to the matrix engine. Blank lines are skipped.

    Args:
        data: Raw file content
        delimiter: Single-character field separator

    Returns:
        List of rows, each a list of field strings

    Raises:
        UpstreamInputError: If the bytes are not UTF-8 or the CSV is malformed
    """
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise UpstreamInputError(f"file is not valid UTF-8 text: {e}") from e

    # Default per-field cap is 131072 characters; a single cell may hold the whole upload.
    csv.field_size_limit(max(csv.field_size_limit(), len(text) + 1))

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)
    try:
        return [row for row in reader if row]
    except csv.Error as e:
        raise UpstreamInputError(f"parse error on line {reader.line_num}: {e}") from e
