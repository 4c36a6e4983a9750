from django.http import HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .forms import MatrixUploadForm
from .services import process_matrix_upload, upstream_error

TEXT_CONTENT_TYPE = 'text/plain; charset=utf-8'


@csrf_exempt
@require_POST
def matrix_operation(request, operation):
    """
    Apply a matrix operation to an uploaded CSV file.

    POST: Validate the "file" upload, run the operation, and reply with
    the result as plain text (400 with the error text on failure)
    """
    form = MatrixUploadForm(request.POST, request.FILES)

    if not form.is_valid():
        message = form.errors['file'][0]
        return HttpResponse(
            upstream_error(message).error, status=400, content_type=TEXT_CONTENT_TYPE
        )

    result = process_matrix_upload(form.cleaned_data['file'], operation)

    if result.success:
        return HttpResponse(result.text, content_type=TEXT_CONTENT_TYPE)
    return HttpResponse(result.error, status=400, content_type=TEXT_CONTENT_TYPE)
