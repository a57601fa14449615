from __future__ import annotations

from ..models.import_result import ImportResult
from ..models.source_format import SourceFormat

"""SUMMARY line rendering.

Format:
SUMMARY source={format} products={total} success={success} failed={failed}
elapsed_sec={elapsed} throughput_rps={throughput}
"""


def _format_number(value: float) -> str:
    # Integers print without decimals; tiny values avoid scientific notation
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 2))


def render_summary_fields(source_format: SourceFormat, result: ImportResult) -> str:
    """Key=value part of the SUMMARY line; the label is added by the log formatter."""
    return (
        f"source={source_format.value} "
        f"products={result.total} "
        f"success={result.success} "
        f"failed={result.failed} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.throughput_rows_per_sec)}"
    )


def render_summary_line(source_format: SourceFormat, result: ImportResult) -> str:
    """Render the SUMMARY line for one import run.

    Examples:
        >>> result = ImportResult(total=3, success=2, failed=1, errors=["b: dup"], elapsed_seconds=2.0)
        >>> render_summary_line(SourceFormat.SHOPIFY, result)
        'SUMMARY source=shopify products=3 success=2 failed=1 elapsed_sec=2 throughput_rps=1'
    """
    return f"SUMMARY {render_summary_fields(source_format, result)}"
