"""
Player identifier helpers.

The game stores a player's local ID in vehicle IDs and other nested
values, sometimes decorated with colour codes such as "[FF0000]". The
rewrite works on the JSON text of a value so that every embedded
occurrence is replaced without knowing the record layout.
"""
from typing import Any, Optional
import json
import re
import secrets

from account_relay.config import settings
from account_relay.logger import logger

# Square-bracketed 6-digit uppercase hex colour token, e.g. "[FFAA00]"
COLOR_CODE_PATTERN = re.compile(r"\[[0-9A-F]{6}\]")

# Upper-case alphanumerics without 0/O, 1/I/L
ID_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"


def strip_color_codes(text: Optional[str]) -> str:
    """Return `text` without colour-code tokens."""
    if not text:
        return ""
    return COLOR_CODE_PATTERN.sub("", text)


def replace_identifier(text: str, old_id: Optional[str], old_id_clean: Optional[str], new_id: str) -> str:
    """
    Replace `old_id` and `old_id_clean` in `text` with `new_id` in one pass.

    Matches are literal and replaced text is never scanned again, so a
    `new_id` containing the old one is inserted exactly once.
    """
    forms = [form for form in (old_id, old_id_clean) if form]
    if not forms:
        return text
    # Longer form first so the decorated ID wins over its clean part
    forms = sorted(set(forms), key=len, reverse=True)
    pattern = "|".join(re.escape(form) for form in forms)
    # Callable replacement keeps backslashes in `new_id` literal
    return re.sub(pattern, lambda _: new_id, text)


def _json_escaped(text: str) -> str:
    """`text` as it appears inside a JSON string literal."""
    return json.dumps(text, ensure_ascii=False)[1:-1]


def rewrite_identifier(value: Any, old_id: Optional[str], old_id_clean: Optional[str], new_id: str) -> Any:
    """
    Replace every occurrence of the old identifier inside `value`.

    `value` is serialized to JSON, `old_id` and `old_id_clean` are replaced
    with `new_id` as literal text (all three in their JSON-escaped form),
    and the result is decoded again. If the rewritten text no longer
    decodes the original value is returned unchanged.
    """
    if not old_id:
        return value

    try:
        text = json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.warning(f"Identifier rewrite skipped, value is not JSON serializable: {e}")
        return value

    rewritten = replace_identifier(
        text,
        _json_escaped(old_id),
        _json_escaped(old_id_clean) if old_id_clean else None,
        _json_escaped(new_id),
    )

    if rewritten == text:
        return json.loads(text)

    try:
        return json.loads(rewritten)
    except json.JSONDecodeError as e:
        logger.warning(f"Identifier rewrite produced invalid JSON, keeping original value: {e.msg}")
        return value


def generate_identifier(length: Optional[int] = None) -> str:
    """Generate a random upper-case player identifier."""
    size = length or settings.GENERATED_ID_LENGTH
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(size)).upper()
