"""
Matrix Engine

Pure Python matrix validation and transformations, framework-agnostic.
This module should have NO Django imports.

A matrix is a square grid of base-10 integer tokens. Validation parses the
grid once into a ValidatedMatrix; every transformation then works on the
parsed form. Sums and products use Python's arbitrary-precision integers.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union

# Digits per chunk when converting long integers to and from text.
# Stays below the interpreter's int/str conversion limit (4300 digits).
INTEGER_CHUNK_DIGITS = 1000

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class MatrixValidationError(Exception):
    """Base class for matrices rejected by validate()."""

    message = "invalid input"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)

    def describe(self) -> str:
        """
        Render the error as response text.

        Returns:
            The message on its own line, followed by a "Caused by" line
            when the error wraps a lower-level failure.
        """
        text = f"{self}\n"
        if self.__cause__ is not None:
            text += f"\tCaused by: {self.__cause__}\n"
        return text


class EmptyMatrixError(MatrixValidationError):
    """Raised when the matrix has no rows."""

    message = "invalid input: empty matrix"


class NotSquareError(MatrixValidationError):
    """Raised when a row length differs from the number of rows."""

    message = "invalid input: matrix is not square"

    def __init__(self, row: int, row_size: int, matrix_size: int):
        super().__init__()
        self.row = row
        self.row_size = row_size
        self.matrix_size = matrix_size

    def describe(self) -> str:
        return (
            f"{self}\n"
            f"\trow {self.row + 1} has {self.row_size} cells, expected {self.matrix_size}\n"
        )


class InvalidNumberError(MatrixValidationError):
    """Raised when a cell is not a base-10 integer."""

    message = "invalid input: matrix has invalid number format"

    def __init__(self, token: str, row: int, column: int):
        super().__init__()
        self.token = token
        self.row = row
        self.column = column


class MatrixPreconditionError(RuntimeError):
    """Raised when an operation receives an unvalidated matrix that is invalid."""

    pass


class Operation(str, Enum):
    """Operations a client can request."""

    ECHO = "echo"
    TRANSPOSE = "transpose"
    FLATTEN = "flatten"
    SUM = "sum"
    MULTIPLY = "multiply"


@dataclass(frozen=True)
class Matrix:
    """Raw grid of text tokens, row-major, as received from the reader."""

    cells: tuple[tuple[str, ...], ...]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]]) -> "Matrix":
        return cls(cells=tuple(tuple(row) for row in rows))

    @property
    def size(self) -> int:
        return len(self.cells)


@dataclass(frozen=True)
class ValidatedMatrix:
    """Square integer matrix: trimmed tokens and their parsed values."""

    tokens: tuple[tuple[str, ...], ...]
    values: tuple[tuple[int, ...], ...]


@dataclass
class MatrixResult:
    """Result of running one operation on a grid."""

    success: bool
    text: Optional[str] = None
    error: Optional[str] = None


def trim_token(token: str) -> str:
    """Strip surrounding space characters (tabs and newlines are kept)."""
    return token.strip(" ")


def parse_integer(token: str) -> int:
    """
    Parse a base-10 signed integer of any length.

    Args:
        token: Trimmed cell text

    Returns:
        The integer value

    Raises:
        ValueError: If the token is not an optional sign followed by digits
    """
    if not _INTEGER_PATTERN.fullmatch(token):
        raise ValueError(f"not a base-10 integer: {token!r}")

    sign, digits = "", token
    if token[0] in "+-":
        sign, digits = token[0], token[1:]

    value = 0
    for start in range(0, len(digits), INTEGER_CHUNK_DIGITS):
        chunk = digits[start:start + INTEGER_CHUNK_DIGITS]
        value = value * 10 ** len(chunk) + int(chunk)
    return -value if sign == "-" else value


def format_integer(value: int) -> str:
    """Return the decimal text of an integer of any size."""
    if value < 0:
        return "-" + format_integer(-value)

    base = 10 ** INTEGER_CHUNK_DIGITS
    chunks = []
    while value >= base:
        value, chunk = divmod(value, base)
        chunks.append(str(chunk).zfill(INTEGER_CHUNK_DIGITS))
    chunks.append(str(value))
    return "".join(reversed(chunks))


def validate(matrix: Matrix) -> ValidatedMatrix:
    """
    Check that a matrix is non-empty, square and made of integers.

    The checks run in a fixed order and the first failure is raised:
    emptiness, then the length of every row, then every cell in row-major
    order.

    Args:
        matrix: Raw matrix to check

    Returns:
        ValidatedMatrix holding trimmed tokens and parsed values

    Raises:
        EmptyMatrixError: If there are no rows
        NotSquareError: If a row length differs from the row count
        InvalidNumberError: If a trimmed cell is not an integer; the parse
            failure is chained as the cause
    """
    if not matrix.cells:
        raise EmptyMatrixError()

    size = matrix.size
    for row_index, row in enumerate(matrix.cells):
        if len(row) != size:
            raise NotSquareError(row_index, len(row), size)

    tokens = []
    values = []
    for row_index, row in enumerate(matrix.cells):
        row_tokens = tuple(trim_token(cell) for cell in row)
        row_values = []
        for column_index, token in enumerate(row_tokens):
            try:
                row_values.append(parse_integer(token))
            except ValueError as e:
                raise InvalidNumberError(token, row_index, column_index) from e
        tokens.append(row_tokens)
        values.append(tuple(row_values))

    return ValidatedMatrix(tokens=tuple(tokens), values=tuple(values))


def _require_valid(matrix: Union[Matrix, ValidatedMatrix]) -> ValidatedMatrix:
    if isinstance(matrix, ValidatedMatrix):
        return matrix
    try:
        return validate(matrix)
    except MatrixValidationError as e:
        raise MatrixPreconditionError(
            f"operation requires a valid matrix: {e}"
        ) from e


def _format_rows(rows) -> str:
    return "".join(",".join(row) + "\n" for row in rows)


def echo(matrix: Matrix) -> str:
    """Return the raw rows, comma separated, one per line."""
    return _format_rows(matrix.cells)


def transpose(matrix: Union[Matrix, ValidatedMatrix]) -> str:
    """Return the matrix with rows and columns swapped, in echo format."""
    valid = _require_valid(matrix)
    return _format_rows(zip(*valid.tokens))


def flatten(matrix: Union[Matrix, ValidatedMatrix]) -> str:
    """Return every cell in row-major order on a single line."""
    valid = _require_valid(matrix)
    return ",".join(token for row in valid.tokens for token in row) + "\n"


def sum_values(matrix: Union[Matrix, ValidatedMatrix]) -> str:
    """Return the sum of every cell."""
    valid = _require_valid(matrix)
    return format_integer(sum(value for row in valid.values for value in row)) + "\n"


def multiply(matrix: Union[Matrix, ValidatedMatrix]) -> str:
    """Return the product of every cell."""
    valid = _require_valid(matrix)
    return format_integer(math.prod(value for row in valid.values for value in row)) + "\n"


_TRANSFORMATIONS = {
    Operation.TRANSPOSE: transpose,
    Operation.FLATTEN: flatten,
    Operation.SUM: sum_values,
    Operation.MULTIPLY: multiply,
}


def run_operation(
    operation: Union[Operation, str], rows: Sequence[Sequence[str]]
) -> MatrixResult:
    """
    Validate a grid and apply one operation to it.

    Args:
        operation: Operation or its name ("echo", "transpose", ...)
        rows: Grid of raw text tokens

    Returns:
        MatrixResult with the operation output, or the validation error text.
        No output is produced for an invalid grid.

    Raises:
        ValueError: If the operation name is unknown
    """
    operation = Operation(operation)
    matrix = Matrix.from_rows(rows)

    try:
        valid = validate(matrix)
    except MatrixValidationError as e:
        return MatrixResult(success=False, error=e.describe())

    if operation is Operation.ECHO:
        return MatrixResult(success=True, text=echo(matrix))
    return MatrixResult(success=True, text=_TRANSFORMATIONS[operation](valid))
