import time
from werkzeug.utils import secure_filename

from portfolio.domain.exceptions import ValidationError

IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp', 'svg'}
DOCUMENT_EXTENSIONS = {'pdf'}

# Extensions accepted per storage bucket
ALLOWED_EXTENSIONS = {
    'assets': IMAGE_EXTENSIONS,
    'projects': IMAGE_EXTENSIONS,
    'certificates': IMAGE_EXTENSIONS,
    'resumes': DOCUMENT_EXTENSIONS,
}

def file_extension(filename):
    filename = secure_filename(filename or '')
    if '.' not in filename:
        return ''
    return filename.rsplit('.', 1)[1].lower()

def allowed_file(filename, bucket):
    return file_extension(filename) in ALLOWED_EXTENSIONS.get(bucket, set())

def unique_filename(prefix, filename, now=None):
    """
    Build the storage path for an upload: {prefix}-{epoch millis}.{ext}
    """
    millis = int((time.time() if now is None else now) * 1000)
    return f"{prefix}-{millis}.{file_extension(filename)}"

def check_upload(filename, bucket):
    if not filename:
        raise ValidationError("No file selected", fields=["file"])

    if not allowed_file(filename, bucket):
        allowed = ", ".join(sorted(ALLOWED_EXTENSIONS.get(bucket, ())))
        raise ValidationError(
            f"File type not allowed for '{bucket}' (allowed: {allowed})",
            fields=["file"]
        )
