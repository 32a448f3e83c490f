"""
Plan export: text reports, conversion tables and a minimal PDF document.

The PDF is a single-page placeholder with the plan summary and paces; it is
well formed (correct object offsets and stream length) but is not a
typeset layout.
"""

from dataclasses import dataclass
from typing import List, Tuple

import pandas as pd

from plan_data.reference import GOAL_RACES
from plan_core.models import GeneratedPlan, GoalRace, PaceZone, TrainingPacesWithUnits
from plan_core.units import (
    UnitSystem,
    convert_distance,
    convert_pace,
    format_distance,
)
from plan_core.workouts import ExampleWeek


MIME_TYPES = {
    'pdf': "application/pdf",
    'text': "text/plain; charset=utf-8",
}

# Distances shown in the conversion table, in km
REFERENCE_DISTANCES_KM = (
    ("1 km", 1.0),
    ("1 mile", 1.609344),
    ("5K", 5.0),
    ("10K", 10.0),
    ("Half Marathon", 21.0975),
    ("Marathon", 42.195),
)


@dataclass(frozen=True)
class ExportDocument:
    filename: str
    mime_type: str
    content: bytes


def _goal_race_id(plan: GeneratedPlan) -> str:
    goal = plan.constraints.goal_race
    return goal.value if isinstance(goal, GoalRace) else goal


def _goal_race_name(plan: GeneratedPlan) -> str:
    goal = _goal_race_id(plan)
    info = GOAL_RACES.get(goal)
    return info.name if info else goal


def _plan_title(plan: GeneratedPlan) -> str:
    return f"{plan.plan_level.value.capitalize()} Training Plan"


def export_filename(plan: GeneratedPlan, extension: str = "pdf") -> str:
    """training-plan-<level>-<goal race>.<extension>"""
    return f"training-plan-{plan.plan_level.value}-{_goal_race_id(plan)}.{extension}"


# =============================================================================
# Tables
# =============================================================================

def build_pace_conversion_table(
    paces: TrainingPacesWithUnits,
    system: UnitSystem
) -> pd.DataFrame:
    """
    The plan's paces in both min/km and min/mi.

    Args:
        paces: Paces as they appear in the plan
        system: Unit system the paces are written in
    """
    other = UnitSystem.IMPERIAL if system == UnitSystem.METRIC else UnitSystem.METRIC
    rows = []
    for zone, detail in paces.items():
        converted = convert_pace(detail.value, system, other)
        per_km, per_mile = (
            (detail.value, converted) if system == UnitSystem.METRIC
            else (converted, detail.value)
        )
        rows.append({'Pace': zone.value.capitalize(), 'min/km': per_km, 'min/mi': per_mile})
    return pd.DataFrame(rows).set_index('Pace')


def build_distance_conversion_table() -> pd.DataFrame:
    """Common race and training distances in km and miles."""
    rows = [
        {
            'Distance': label,
            'km': round(km, 2),
            'mi': round(convert_distance(km, "km", "mi"), 2),
        }
        for label, km in REFERENCE_DISTANCES_KM
    ]
    return pd.DataFrame(rows).set_index('Distance')


def phase_summary_frame(plan: GeneratedPlan) -> pd.DataFrame:
    """One row per phase: weeks, quality sessions and weekly volume."""
    rows = []
    for phase in plan.plan_structure:
        week = phase.example_week
        long_run = week.long_run
        rows.append({
            'Phase': phase.name,
            'Weeks': phase.duration,
            'Quality': phase.quality_sessions,
            f'Target ({week.unit})': week.total_mileage,
            f'Planned ({week.unit})': week.planned_mileage,
            f'Long run ({week.unit})': long_run.distance if long_run else 0.0,
        })
    return pd.DataFrame(rows).set_index('Phase')


def example_week_frame(week: ExampleWeek) -> pd.DataFrame:
    rows = []
    for entry in week.days:
        rows.append({
            'Day': entry.weekday.label,
            'Type': entry.workout_type.value,
            'Workout': entry.workout.description,
            'Duration': entry.workout.duration,
            'Pace': entry.pace_zone.value if entry.pace_zone else "-",
            'Distance': (
                format_distance(entry.distance, week.unit) if entry.distance else "-"
            ),
        })
    return pd.DataFrame(rows).set_index('Day')


# =============================================================================
# Text
# =============================================================================

def render_plan_text(plan: GeneratedPlan, include_conversion_tables: bool = False) -> str:
    """Plain-text report of a generated plan."""
    constraints = plan.constraints
    metadata = plan.metadata
    mileage = metadata.weekly_mileage_range

    report = f"""
{'='*70}
{_plan_title(plan)}
{'='*70}
Plan ID:          {plan.id}
Generated:        {metadata.generated_at.strftime('%Y-%m-%d %H:%M:%S')}
Goal race:        {_goal_race_name(plan)}
Duration:         {metadata.total_weeks} weeks
Unit system:      {plan.unit_system.value.capitalize()}
Training days:    {constraints.selected_day_count}/week
Time commitment:  {metadata.estimated_time_commitment}
Weekly mileage:   {mileage.min:g}-{mileage.max:g} {mileage.unit}
Fitness score:    {plan.fitness_score if plan.fitness_score is not None else 'n/a'}
Pace source:      {plan.pace_source.value}

TRAINING PACES
--------------
"""
    for zone, detail in plan.training_paces.items():
        report += f"{zone.value.capitalize():<12} {detail.value:>6} {detail.unit:<7} {detail.description}\n"

    if plan.altitude_adjustments is not None:
        block = plan.altitude_adjustments
        report += "\nALTITUDE\n--------\n"
        report += f"{block.explanation}\n"
        for zone in PaceZone:
            report += f"  {zone.value.capitalize():<12} {block.adjustments[zone.value]}\n"

    if plan.notices:
        report += "\nNOTES\n-----\n"
        for notice in plan.notices:
            report += f"- {notice}\n"

    report += "\nPLAN STRUCTURE\n--------------\n"
    report += phase_summary_frame(plan).to_string() + "\n"

    for phase in plan.plan_structure:
        report += f"\n{phase.name} ({phase.duration} weeks)\n"
        report += "-" * 70 + "\n"
        report += f"Focus: {phase.focus}\n"
        report += example_week_frame(phase.example_week).to_string() + "\n"

    if include_conversion_tables:
        report += "\nPACE CONVERSION\n---------------\n"
        report += build_pace_conversion_table(plan.training_paces, plan.unit_system).to_string()
        report += "\n\nDISTANCE CONVERSION\n-------------------\n"
        report += build_distance_conversion_table().to_string() + "\n"

    report += "\nPROGRESSION PRINCIPLES\n----------------------\n"
    for principle in metadata.progression_principles:
        report += f"- {principle}\n"

    report += f"\n{'='*70}\n"
    return report


# =============================================================================
# PDF
# =============================================================================

def _pdf_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _pdf_lines(plan: GeneratedPlan, include_conversion_tables: bool) -> List[Tuple[int, int, str]]:
    """(font size, line advance, text) for each line on the page."""
    lines = [
        (16, 0, _plan_title(plan)),
        (12, 25, f"Goal: {_goal_race_name(plan)}"),
        (12, 20, f"Duration: {plan.metadata.total_weeks} weeks"),
        (12, 20, f"Unit System: {plan.unit_system.value.capitalize()}"),
        (12, 20, f"Training Days: {plan.constraints.selected_day_count}/week"),
        (14, 30, "Training Paces:"),
    ]
    for zone, detail in plan.training_paces.items():
        lines.append((10, 15 if lines[-1][0] == 10 else 20,
                      f"{zone.value.capitalize()}: {detail.value} {detail.unit}"))

    if include_conversion_tables:
        lines.append((14, 30, "Pace Conversion (min/km | min/mi):"))
        table = build_pace_conversion_table(plan.training_paces, plan.unit_system)
        for i, (name, row) in enumerate(table.iterrows()):
            lines.append((10, 20 if i == 0 else 15,
                          f"{name}: {row['min/km']} | {row['min/mi']}"))
    return lines


def render_plan_pdf(plan: GeneratedPlan, include_conversion_tables: bool = False) -> bytes:
    """Single-page PDF with the plan summary and training paces."""
    stream = ["BT", "50 750 Td"]
    for size, advance, text in _pdf_lines(plan, include_conversion_tables):
        if advance:
            stream.append(f"0 -{advance} Td")
        stream.append(f"/F1 {size} Tf")
        stream.append(f"({_pdf_escape(text)}) Tj")
    stream.append("ET")
    stream_bytes = "\n".join(stream).encode("latin-1", errors="replace")

    objects = [
        b"<<\n/Type /Catalog\n/Pages 2 0 R\n>>",
        b"<<\n/Type /Pages\n/Kids [3 0 R]\n/Count 1\n>>",
        (b"<<\n/Type /Page\n/Parent 2 0 R\n/MediaBox [0 0 612 792]\n"
         b"/Resources << /Font << /F1 5 0 R >> >>\n/Contents 4 0 R\n>>"),
        (b"<<\n/Length " + str(len(stream_bytes)).encode() + b"\n>>\nstream\n"
         + stream_bytes + b"\nendstream"),
        b"<<\n/Type /Font\n/Subtype /Type1\n/BaseFont /Helvetica\n>>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<<\n/Size {len(objects) + 1}\n/Root 1 0 R\n>>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode()
    return bytes(out)


def export_plan(
    plan: GeneratedPlan,
    include_conversion_tables: bool = False,
    fmt: str = "pdf"
) -> ExportDocument:
    """
    Produce a downloadable document for a plan.

    Args:
        plan: Generated plan
        include_conversion_tables: Append pace and distance conversions
        fmt: "pdf" or "text"

    Raises:
        ValueError: for any other format
    """
    if fmt == "pdf":
        content = render_plan_pdf(plan, include_conversion_tables)
        extension = "pdf"
    elif fmt == "text":
        content = render_plan_text(plan, include_conversion_tables).encode("utf-8")
        extension = "txt"
    else:
        raise ValueError(f"Unsupported export format: {fmt!r}")

    return ExportDocument(
        filename=export_filename(plan, extension),
        mime_type=MIME_TYPES[fmt],
        content=content,
    )
