"""
Forms for the matrices application.
"""
from django import forms
from django.conf import settings


class MatrixUploadForm(forms.Form):
    """Form for uploading a CSV matrix."""

    file = forms.FileField(
        label="Select CSV File",
        help_text="A square matrix of integers, one row per line.",
        error_messages={
            'required': "no file uploaded.",
            'empty': "the submitted file is empty.",
        },
    )

    def clean_file(self):
        """Validate the upload is within the configured size limit."""
        upload = self.cleaned_data.get('file')

        if upload and upload.size > settings.MATRIX_MAX_UPLOAD_SIZE:
            raise forms.ValidationError(
                f"file size exceeds the {settings.MATRIX_MAX_UPLOAD_SIZE} byte limit. "
                f"Your file is {upload.size} bytes."
            )

        return upload
