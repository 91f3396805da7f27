from __future__ import annotations

from typing import Any, Type, TypeVar

import pydantic
from pydantic import BaseModel

from meeting_assistant.errors import ValidationError


ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_input(model: Type[ModelT], raw: Any) -> ModelT:
    """Check a raw procedure input against its declared shape.

    ``None`` is treated as an empty object so procedures without input can be
    called bare.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValidationError(f"Expected an object, received {type(raw).__name__}")
    try:
        return model.model_validate(raw)
    except pydantic.ValidationError as exc:
        details = [
            {"path": list(err["loc"]), "message": err["msg"], "type": err["type"]}
            for err in exc.errors()
        ]
        first = details[0]
        where = ".".join(str(p) for p in first["path"]) or "input"
        raise ValidationError(f"{where}: {first['message']}", details=details) from exc
