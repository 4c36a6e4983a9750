"""
Tests for matrices services.
"""
from unittest.mock import patch

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase, override_settings

from core.matrix_engine import MatrixResult, Operation
from matrices.services import process_matrix_upload, upstream_error


def _upload(content, name='matrix.csv'):
    return SimpleUploadedFile(name, content, content_type='text/csv')


class ProcessMatrixUploadTests(SimpleTestCase):
    """Tests for process_matrix_upload service function."""

    def test_sum_of_uploaded_matrix(self):
        result = process_matrix_upload(_upload(b'1,2\n3,4\n'), Operation.SUM)

        self.assertIsInstance(result, MatrixResult)
        self.assertTrue(result.success)
        self.assertEqual(result.text, '10\n')

    def test_transpose_of_uploaded_matrix(self):
        result = process_matrix_upload(_upload(b'1, 2\n3, 4\n'), Operation.TRANSPOSE)
        self.assertEqual(result.text, '1,3\n2,4\n')

    def test_validation_failure_returns_error_text(self):
        """Engine validation errors come back as the result error."""
        with self.assertLogs('matrices.services', level='INFO') as logs:
            result = process_matrix_upload(_upload(b'1,2,3\n4,5\n'), Operation.ECHO)

        self.assertFalse(result.success)
        self.assertIsNone(result.text)
        self.assertEqual(
            result.error, 'invalid input: matrix is not square\n\trow 1 has 3 cells, expected 2\n'
        )
        self.assertIn('matrix.csv', logs.output[0])

    def test_blank_file_is_empty_matrix(self):
        result = process_matrix_upload(_upload(b'\n\n'), Operation.FLATTEN)
        self.assertEqual(result.error, 'invalid input: empty matrix\n')

    def test_malformed_csv_is_upstream_error(self):
        """Parse failures never reach the engine."""
        with patch('matrices.services.run_operation') as mock_run:
            with self.assertLogs('matrices.services', level='WARNING'):
                result = process_matrix_upload(_upload(b'"1,2\n3,4\n'), Operation.SUM)

        mock_run.assert_not_called()
        self.assertFalse(result.success)
        self.assertTrue(result.error.startswith('error parse error'))

    def test_undecodable_upload(self):
        with self.assertLogs('matrices.services', level='WARNING'):
            result = process_matrix_upload(_upload(b'\xff\xfe'), Operation.SUM)

        self.assertFalse(result.success)
        self.assertIn('UTF-8', result.error)

    def test_sum_of_cell_beyond_csv_field_limit(self):
        """A 200000-digit cell is read and summed exactly."""
        digits = b'9' * 200000

        result = process_matrix_upload(_upload(digits + b'\n'), Operation.SUM)

        self.assertTrue(result.success)
        self.assertEqual(result.text, digits.decode() + '\n')

    @override_settings(MATRIX_CSV_DELIMITER=';')
    def test_configured_delimiter(self):
        result = process_matrix_upload(_upload(b'2;3\n4;5\n'), Operation.MULTIPLY)
        self.assertEqual(result.text, '120\n')


class UpstreamErrorTests(SimpleTestCase):
    """Tests for upstream_error."""

    def test_upstream_error_format(self):
        result = upstream_error('no file uploaded.')

        self.assertFalse(result.success)
        self.assertEqual(result.error, 'error no file uploaded.\n')
