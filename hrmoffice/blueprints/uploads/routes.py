from flask import jsonify, request, abort
from flask_login import login_required, current_user
from . import bp
from ...services.storage import save_file, is_image


@bp.post("/image")
@login_required
def upload_image():
    f = request.files.get("file")
    if f is None or not f.filename:
        abort(400, description="No file uploaded")
    if not is_image(f.filename):
        abort(400, description="Only image uploads are allowed")
    url = save_file(f, prefix=f"org{current_user.org_id}/uploads")
    return jsonify({"url": url}), 201
