"""Strip formatting noise from user-typed tax ids."""

import re
from typing import Optional

_SEPARATORS = re.compile(r"[\s\-\.]")


def normalize(raw: Optional[str]) -> str:
    """Remove spaces, hyphens and dots and uppercase the rest.

    Never fails: anything that is not a tax id simply fails the grammar
    match afterwards.

    Examples:
        >>> normalize("che-123.456.789 mwst")
        'CHE123456789MWST'
    """
    if not raw:
        return ""
    return _SEPARATORS.sub("", raw).upper()
