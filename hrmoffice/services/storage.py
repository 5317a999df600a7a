import os
from uuid import uuid4
from werkzeug.utils import secure_filename
from flask import current_app
import boto3
from botocore.client import Config

IMAGE_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.gif', '.webp', '.svg'}


def _ensure_local_dir():
    d = current_app.config['LOCAL_STORAGE_DIR']
    os.makedirs(d, exist_ok=True)
    return d


def _save_local(file_storage, key):
    d = _ensure_local_dir()
    path = os.path.join(d, key)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    file_storage.save(path)
    return f"file://{os.path.abspath(path)}"


def _s3_client():
    # endpoint_url may be empty in AWS-managed S3
    s3_kwargs = {}
    endpoint = current_app.config.get('S3_ENDPOINT')
    if endpoint:
        s3_kwargs['endpoint_url'] = endpoint
    region = current_app.config.get('S3_REGION')
    if region:
        s3_kwargs['region_name'] = region
    return boto3.client(
        's3',
        aws_access_key_id=current_app.config.get('S3_ACCESS_KEY'),
        aws_secret_access_key=current_app.config.get('S3_SECRET_KEY'),
        config=Config(signature_version='s3v4', s3={'addressing_style': 'virtual'}),
        **s3_kwargs,
    )


def is_image(filename):
    return os.path.splitext(filename or '')[1].lower() in IMAGE_EXTENSIONS


def save_file(file_storage, prefix=""):
    """Store an uploaded file and return its URL (s3:// or file://)."""
    backend = current_app.config.get('STORAGE_BACKEND', 'local')
    filename = secure_filename(file_storage.filename) or 'upload'
    # uuid prefix keeps repeated uploads of the same name apart
    name = f"{uuid4().hex}_{filename}"
    key = f"{prefix}/{name}" if prefix else name

    if backend != 's3':
        return _save_local(file_storage, key)

    bucket = current_app.config.get('S3_BUCKET')
    stream = getattr(file_storage, 'stream', file_storage)
    try:
        _s3_client().upload_fileobj(stream, bucket, key)
        return f"s3://{bucket}/{key}"
    except Exception as e:
        current_app.logger.exception('S3 upload failed, falling back to local storage: %s', e)
        try:
            stream.seek(0)
        except Exception:
            pass
        return _save_local(file_storage, key)
