import html
import re
from typing import Optional

CONTROL_CHARACTERS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


def sanitize_text(value: Optional[str], max_length: int = 500) -> str:
    """
    Trim, length-check and escape free text typed by a visitor.

    Newlines and tabs are kept; other control characters are dropped.

    Raises:
        ValueError: If input exceeds max_length
    """
    if not value:
        return ""

    value = str(value).strip()

    if len(value) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    value = html.escape(value, quote=True)

    return CONTROL_CHARACTERS.sub("", value)
