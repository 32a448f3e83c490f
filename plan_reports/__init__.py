"""Plan export: text and PDF documents, conversion tables."""

from .export import (
    ExportDocument,
    export_plan,
    export_filename,
    render_plan_text,
    render_plan_pdf,
    build_pace_conversion_table,
    build_distance_conversion_table,
    phase_summary_frame,
    example_week_frame,
)

__all__ = [
    'ExportDocument',
    'export_plan',
    'export_filename',
    'render_plan_text',
    'render_plan_pdf',
    'build_pace_conversion_table',
    'build_distance_conversion_table',
    'phase_summary_frame',
    'example_week_frame',
]
