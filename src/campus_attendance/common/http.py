from __future__ import annotations

from typing import Any, Iterable, Mapping

from flask import request

from ..core.exceptions import ValidationError


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def require_fields(data: Mapping[str, Any], names: Iterable[str], message: str) -> None:
    """Raise ``message`` as a 400 unless every field in ``names`` is present and non-empty."""
    for name in names:
        if data.get(name) in (None, ""):
            raise ValidationError(message)


def uploaded_text(field: str = "file") -> str:
    """Text of a multipart upload, BOM stripped."""
    upload = request.files.get(field)
    if upload is None or not upload.filename:
        raise ValidationError("No file provided")
    return upload.read().decode("utf-8-sig", errors="replace")
