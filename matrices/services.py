"""
Matrices Service Layer

Business logic for matrix uploads, separated from views
for better testability.
"""
import logging

from django.conf import settings

from core.matrix_engine import MatrixResult, Operation, run_operation
from core.matrix_io import UpstreamInputError, read_records

logger = logging.getLogger(__name__)


def upstream_error(message: str) -> MatrixResult:
    """Build the failed result for input that never reached the engine."""
    return MatrixResult(success=False, error=f"error {message}\n")


def process_matrix_upload(uploaded_file, operation: Operation) -> MatrixResult:
    """
    Read an uploaded CSV file and apply a matrix operation to it.

    This function bridges Django's UploadedFile with the framework-agnostic
    matrix engine in the core module.

    Args:
        uploaded_file: Django UploadedFile object
        operation: Operation to run on the matrix

    Returns:
        MatrixResult with the operation output or an error message
    """
    filename = getattr(uploaded_file, 'name', None)

    try:
        records = read_records(
            uploaded_file.read(), delimiter=settings.MATRIX_CSV_DELIMITER
        )
    except UpstreamInputError as e:
        logger.warning("Could not read upload %s: %s", filename, e)
        return upstream_error(str(e))

    result = run_operation(operation, records)

    if result.success:
        logger.debug(
            "Applied %s to %s (%d rows)", Operation(operation).value, filename, len(records)
        )
    else:
        logger.info("Rejected upload %s: %s", filename, result.error.splitlines()[0])

    return result
