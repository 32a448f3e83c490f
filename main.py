#!/usr/bin/env python3
"""
Running Training Plan Generator - CLI Entry Point

Usage:
    python main.py generate --experience recreational --mileage 20 --goal "Half Marathon"
    python main.py paces 50 [--units metric]
    python main.py score 5K 19:57
    python main.py validate --plan advanced --days Sun,Tue,Thu,Sat --duration 60
    python main.py convert pace 5:00 metric imperial
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

from plan_core import (
    DEFAULT_CONFIG,
    PlannerError,
    RaceInput,
    TrainingConstraints,
    convert_altitude,
    convert_distance,
    convert_pace,
    create_fitness_assessment,
    create_unit_preferences,
    detect_default_unit_system,
    format_constraint_impact,
    generate_training_plan,
    get_recommended_session_duration,
    get_training_paces,
    load_config,
    resolve_fitness_score,
    validate_mileage_for_experience,
    validate_training_constraints,
)
from plan_core.models import ExperienceLevel, GoalRace, PlanLevel, RaceDistance
from plan_reports import export_plan, render_plan_text

logger = logging.getLogger(__name__)

_DAY_NAMES = ('sun', 'mon', 'tue', 'wed', 'thu', 'fri', 'sat')


def parse_days(value: str) -> Tuple[bool, ...]:
    """
    Parse training days.

    Accepts a 7-character 0/1 mask starting on Sunday ("1010101") or a
    comma-separated list of day names ("Sun,Tue,Thu").
    """
    value = value.strip()
    if len(value) == 7 and set(value) <= {'0', '1'}:
        return tuple(c == '1' for c in value)

    days = [False] * 7
    for part in value.split(','):
        name = part.strip().lower()[:3]
        if not name:
            continue
        if name not in _DAY_NAMES:
            raise argparse.ArgumentTypeError(f"Unknown day: {part.strip()!r}")
        days[_DAY_NAMES.index(name)] = True
    return tuple(days)


def _units(value: Optional[str]):
    return create_unit_preferences(value or detect_default_unit_system())


def run_generate(args) -> int:
    """Generate a full plan and print or write it."""
    preferences = _units(args.units)
    config = load_config(args.config) if args.config else DEFAULT_CONFIG

    race_input = None
    if args.race_distance and args.race_time:
        race_input = RaceInput(RaceDistance(args.race_distance), args.race_time)

    assessment = create_fitness_assessment(
        args.experience, args.mileage, race_input, args.plan
    )
    mileage_check = validate_mileage_for_experience(
        assessment.experience_level, args.mileage, preferences.system
    )
    if mileage_check.warning:
        print(f"Note: {mileage_check.warning}", file=sys.stderr)

    duration = args.duration
    if duration is None:
        duration = get_recommended_session_duration(assessment.selected_plan_level, args.goal)

    constraints = TrainingConstraints(
        available_training_days=args.days,
        session_duration=duration,
        goal_race=GoalRace(args.goal),
        training_altitude=args.altitude,
    )

    validation = validate_training_constraints(
        constraints, assessment.selected_plan_level, preferences.system, assessment
    )
    for warning in validation.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    plan = generate_training_plan(assessment, constraints, preferences, config=config)

    if args.format == 'json':
        output = json.dumps(plan.to_dict(), indent=2)
        if args.output:
            Path(args.output).write_text(output)
            print(f"Plan saved to: {args.output}")
        else:
            print(output)
        return 0

    if args.format == 'pdf':
        document = export_plan(plan, args.conversion_tables, fmt='pdf')
        output_path = Path(args.output or document.filename)
        output_path.write_bytes(document.content)
        print(f"Plan saved to: {output_path}")
        return 0

    report = render_plan_text(plan, args.conversion_tables)
    if args.output:
        Path(args.output).write_text(report)
        print(f"Plan saved to: {args.output}")
    else:
        print(report)
    return 0


def run_paces(args) -> int:
    """Print table paces for a fitness score."""
    preferences = _units(args.units)
    paces = get_training_paces(args.score, preferences.system)
    if paces is None:
        print(f"Fitness score {args.score} is outside the pace table")
        return 1

    print(f"Training paces for fitness score {args.score} ({preferences.pace_unit})")
    print("=" * 50)
    for zone, pace in paces.items():
        print(f"  {zone.value.capitalize():<12} {pace}")
    return 0


def run_score(args) -> int:
    """Print the fitness score for a race result."""
    result = resolve_fitness_score(args.distance, args.time)
    if result is None:
        print(f"Unknown race distance: {args.distance}")
        return 1

    print(f"Fitness score: {result.fitness_score}")
    print(f"Matched time:  {result.matched_time}")
    if result.is_approximate:
        print(f"Warning: {result.warning}")
    return 0


def run_validate(args) -> int:
    """Print constraint warnings for a plan level."""
    preferences = _units(args.units)
    constraints = TrainingConstraints(
        available_training_days=args.days,
        session_duration=args.duration,
        goal_race=args.goal,
        training_altitude=args.altitude,
    )
    assessment = None
    if args.experience:
        assessment = create_fitness_assessment(args.experience, 0, None, args.plan)

    validation = validate_training_constraints(
        constraints, args.plan, preferences.system, assessment
    )

    for line in format_constraint_impact(constraints, args.plan, preferences.system):
        print(f"  {line}")
    print()
    if validation.is_valid:
        print("No issues found.")
    for warning in validation.warnings:
        print(f"Warning: {warning}")

    compatibility = validation.compatibility
    print(f"\nPlan level compatible:  {compatibility.with_plan_level}")
    print(f"Experience compatible:  {compatibility.with_experience}")
    print(f"Goal race compatible:   {compatibility.with_goal_race}")
    return 0 if validation.is_valid else 2


def run_convert(args) -> int:
    """Convert a distance, pace or altitude."""
    if args.kind == 'distance':
        print(f"{convert_distance(float(args.value), args.source, args.target):.3f} {args.target}")
    elif args.kind == 'pace':
        print(convert_pace(args.value, args.source, args.target))
    else:
        print(f"{convert_altitude(float(args.value), args.source, args.target):.0f}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Running Training Plan Generator')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    levels = [level.value for level in PlanLevel]
    goals = [goal.value for goal in GoalRace]
    units = ['metric', 'imperial']

    # Generate command
    gen_parser = subparsers.add_parser('generate', help='Generate a training plan')
    gen_parser.add_argument('--experience', required=True,
                            choices=[e.value for e in ExperienceLevel], help='Experience level')
    gen_parser.add_argument('--mileage', type=float, default=0.0,
                            help='Current weekly mileage in your distance unit')
    gen_parser.add_argument('--race-distance', choices=[d.value for d in RaceDistance],
                            help='Recent race distance')
    gen_parser.add_argument('--race-time', help='Recent race time (MM:SS or H:MM:SS)')
    gen_parser.add_argument('--plan', help='Plan level override')
    gen_parser.add_argument('--days', type=parse_days, default=parse_days('1011101'),
                            help='Training days, e.g. Sun,Tue,Thu or 1010101')
    gen_parser.add_argument('--duration', type=float, help='Session duration (min)')
    gen_parser.add_argument('--goal', choices=goals, default='10K', help='Goal race')
    gen_parser.add_argument('--altitude', type=float, help='Training altitude')
    gen_parser.add_argument('--units', choices=units, help='Unit system')
    gen_parser.add_argument('--config', help='Planner configuration JSON')
    gen_parser.add_argument('--format', choices=['text', 'pdf', 'json'], default='text')
    gen_parser.add_argument('--conversion-tables', action='store_true',
                            help='Include unit conversion tables')
    gen_parser.add_argument('--output', '-o', help='Output file')

    # Paces command
    paces_parser = subparsers.add_parser('paces', help='Show paces for a fitness score')
    paces_parser.add_argument('score', type=int, help='Fitness score (30-85)')
    paces_parser.add_argument('--units', choices=units, help='Unit system')

    # Score command
    score_parser = subparsers.add_parser('score', help='Fitness score from a race result')
    score_parser.add_argument('distance', choices=[d.value for d in RaceDistance])
    score_parser.add_argument('time', help='Race time (MM:SS or H:MM:SS)')

    # Validate command
    val_parser = subparsers.add_parser('validate', help='Check training constraints')
    val_parser.add_argument('--plan', choices=levels, required=True, help='Plan level')
    val_parser.add_argument('--days', type=parse_days, required=True, help='Training days')
    val_parser.add_argument('--duration', type=float, required=True, help='Session duration (min)')
    val_parser.add_argument('--goal', choices=goals, default='10K', help='Goal race')
    val_parser.add_argument('--altitude', type=float, help='Training altitude')
    val_parser.add_argument('--experience', choices=[e.value for e in ExperienceLevel])
    val_parser.add_argument('--units', choices=units, help='Unit system')

    # Convert command
    conv_parser = subparsers.add_parser('convert', help='Convert distances, paces or altitude')
    conv_parser.add_argument('kind', choices=['distance', 'pace', 'altitude'])
    conv_parser.add_argument('value')
    conv_parser.add_argument('source', help='Unit (km, mi, m, ft) or system (metric, imperial)')
    conv_parser.add_argument('target', help='Unit (km, mi, m, ft) or system (metric, imperial)')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    commands = {
        'generate': run_generate,
        'paces': run_paces,
        'score': run_score,
        'validate': run_validate,
        'convert': run_convert,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    try:
        return command(args)
    except (PlannerError, ValueError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
