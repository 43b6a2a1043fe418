"""
Shared schema helpers.

``CamelModel`` is the base for every payload exchanged with clients:
attributes are snake_case in Python and camelCase on the wire.
``APIResponse`` is the envelope wrapped around every response body.
"""

from typing import Any, Iterable, List, Optional, Union

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class APIResponse(BaseModel):
    """Standard response envelope.

    ``data`` holds the payload on success; ``error`` and ``details``
    describe the failure otherwise.  ``count`` is set by list
    endpoints.
    """

    success: bool
    data: Optional[Any] = None
    message: Optional[str] = None
    error: Optional[str] = None
    details: Optional[Union[str, List[str]]] = None
    count: Optional[int] = None


def error_messages(exc: ValidationError, prefix: str = "", exclude: Iterable[str] = ()) -> List[str]:
    """Flatten a pydantic ``ValidationError`` into readable messages.

    Messages raised by our own validators are used verbatim; built‑in
    pydantic errors are prefixed with the offending field.  Errors whose
    first location element is in ``exclude`` are dropped.
    """
    skipped = set(exclude)
    messages: List[str] = []
    for err in exc.errors():
        loc = err.get("loc", ())
        if loc and loc[0] in skipped:
            continue
        ctx_error = (err.get("ctx") or {}).get("error")
        if ctx_error is not None:
            text = str(ctx_error)
        else:
            field = ".".join(str(part) for part in loc)
            text = f"{field}: {err['msg']}" if field else err["msg"]
        messages.append(f"{prefix}{text}")
    return messages
