"""Name filtering for space listings."""

from __future__ import annotations

import re
from collections.abc import Sequence

from spacectl.domain.errors import InvalidPatternError
from spacectl.domain.models import Space


def filter_spaces(spaces: Sequence[Space], pattern: str | None) -> list[Space]:
    """Keep spaces whose name matches *pattern* anywhere (unanchored regex).

    With no pattern the input comes back unchanged, in order.

    Examples:
        >>> from spacectl.domain.models import Organization
        >>> org = Organization(guid="o1", name="acme")
        >>> names = ["dev", "staging", "prod"]
        >>> spaces = [Space(guid=n, name=n, organization=org) for n in names]
        >>> [s.name for s in filter_spaces(spaces, "^(dev|prod)$")]
        ['dev', 'prod']
        >>> [s.name for s in filter_spaces(spaces, "ag")]
        ['staging']
    """
    if pattern is None:
        return list(spaces)
    try:
        regex = re.compile(pattern)
    except re.error as exc:
        raise InvalidPatternError(f"Invalid name filter {pattern!r}: {exc}") from exc
    return [space for space in spaces if regex.search(space.name)]
