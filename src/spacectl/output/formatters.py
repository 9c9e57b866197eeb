"""Output mode dispatch — JSON, quiet, or Rich.

The CLI renders ServiceResult for humans (Rich) or machines (``--json``).
``format_result`` picks the mode from :class:`OutputSettings`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from spacectl.services.result import ServiceResult


class OutputSettings(BaseModel):
    """The output-related subset of the CLI flags."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON wins over quiet; quiet wins over verbose.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        from spacectl.output.renderers import render_quiet

        return render_quiet(result)

    from spacectl.output.renderers import render_result

    return render_result(result, verbose=settings.verbose)
