# =============================================================================
# app/parsers.py - Request Body Parsing
# =============================================================================
# Route handlers accept either JSON or URL-encoded bodies and get the same
# validated Pydantic model back. URL-encoded keys may carry bracket notation
# for nested values:
#
#   user[name]=ada&user[langs][]=py&user[langs][]=c
#   -> {"user": {"name": "ada", "langs": ["py", "c"]}}
#
# Usage:
#   @router.post("")
#   def create_topic(payload: TopicCreate = Depends(body_of(TopicCreate))):
#       ...
# =============================================================================

import json
import re
from typing import Any, Callable, TypeVar
from urllib.parse import parse_qsl

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from app.exceptions import MalformedBodyError

ModelT = TypeVar("ModelT", bound=BaseModel)

JSON_CONTENT_TYPE = "application/json"
URLENCODED_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Bracket segments deeper than this are kept together as one literal key
MAX_NESTING_DEPTH = 5

_KEY_ROOT = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")
_KEY_SEGMENT = re.compile(r"\[([^\[\]]*)\]")


def media_type(content_type: str | None) -> str:
    """Strip parameters from a Content-Type header: 'a/b; charset=x' -> 'a/b'."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_json_media_type(value: str) -> bool:
    return value == JSON_CONTENT_TYPE or value.endswith("+json")


# =============================================================================
# URL-encoded Decoding
# =============================================================================

def split_key(key: str) -> list[str]:
    """
    Split a bracketed form key into path segments.

    Example:
        split_key("a[b][]")  # ["a", "b", ""]
        split_key("plain")   # ["plain"]
    """
    match = _KEY_ROOT.match(key)
    if not match:
        return [key]
    segments = [match.group(1)] + _KEY_SEGMENT.findall(match.group(2))
    if len(segments) > MAX_NESTING_DEPTH + 1:
        head = segments[:MAX_NESTING_DEPTH + 1]
        tail = "".join(f"[{s}]" for s in segments[MAX_NESTING_DEPTH + 1:])
        return head + [tail]
    return segments


def _is_index(segment: str) -> bool:
    return segment == "" or segment.isdigit()


def _get_child(container: dict | list, segment: str) -> Any:
    if isinstance(container, list):
        if segment == "" or not segment.isdigit():
            return None
        index = int(segment)
        return container[index] if index < len(container) else None
    return container.get(segment)


def _set_value(container: dict | list, segment: str, value: Any, leaf: bool) -> None:
    if isinstance(container, list):
        if segment == "":
            container.append(value)
        elif segment.isdigit():
            index = int(segment)
            while len(container) <= index:
                container.append(None)
            container[index] = value
        else:
            container.append({segment: value})
        return

    existing = container.get(segment)
    if leaf and existing is not None:
        # Repeated plain keys collect into a list: a=1&a=2 -> ["1", "2"]
        if isinstance(existing, list):
            existing.append(value)
        else:
            container[segment] = [existing, value]
        return
    container[segment] = value


def _assign(container: dict | list, segments: list[str], value: str) -> None:
    head, rest = segments[0], segments[1:]
    if not rest:
        _set_value(container, head, value, leaf=True)
        return

    child = _get_child(container, head)
    if not isinstance(child, (dict, list)):
        child = [] if _is_index(rest[0]) else {}
        _set_value(container, head, child, leaf=False)
    _assign(child, rest, value)


def decode_urlencoded(raw: str) -> dict[str, Any]:
    """
    Decode an application/x-www-form-urlencoded body with nested keys.

    Args:
        raw: The undecoded body, e.g. "a[b]=1&tags[]=x&tags[]=y"

    Returns:
        Nested dict, e.g. {"a": {"b": "1"}, "tags": ["x", "y"]}
    """
    result: dict[str, Any] = {}
    for key, value in parse_qsl(raw, keep_blank_values=True):
        _assign(result, split_key(key), value)
    return result


# =============================================================================
# Request Body Dependency
# =============================================================================

async def read_body(request: Request) -> Any:
    """
    Read and decode the request body according to its Content-Type.

    Bodies of any other content type are ignored and decode to {}.

    Raises:
        MalformedBodyError: If a JSON body can't be decoded
    """
    kind = media_type(request.headers.get("content-type"))
    raw = await request.body()
    if not raw:
        return {}

    if kind == URLENCODED_CONTENT_TYPE:
        return decode_urlencoded(raw.decode("utf-8", errors="replace"))

    if is_json_media_type(kind):
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedBodyError(str(e)) from e

    return {}


def body_of(model: type[ModelT]) -> Callable[[Request], Any]:
    """
    Build a dependency that parses the body into `model`.

    Validation failures surface as RequestValidationError so they get the
    same 422 response as FastAPI's own body validation.
    """

    async def dependency(request: Request) -> ModelT:
        data = await read_body(request)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise RequestValidationError(
                [{**error, "loc": ("body", *error["loc"])} for error in e.errors(include_url=False)],
                body=data,
            ) from e

    dependency.__name__ = f"{model.__name__.lower()}_body"
    return dependency
