"""
Error types for the plan derivation engine.

Input errors subclass ValueError so callers that already guard with
`except ValueError` keep working.
"""


class PlannerError(Exception):
    """Base exception for all engine errors."""
    pass


class InvalidUnitError(PlannerError, ValueError):
    """Raised for an unknown distance unit or unit system."""

    def __init__(self, unit):
        self.unit = unit
        super().__init__(f"Unknown unit: {unit!r}")


class InvalidPaceFormatError(PlannerError, ValueError):
    """Raised when a pace string is not M:SS."""

    def __init__(self, pace):
        self.pace = pace
        super().__init__(f"Invalid pace format: {pace!r}")


class InvalidTimeFormatError(PlannerError, ValueError):
    """Raised when a race time is neither MM:SS nor H:MM:SS."""

    def __init__(self, time):
        self.time = time
        super().__init__(f"Invalid race time format: {time!r}")


class InvalidPlanLevelError(PlannerError, ValueError):
    """Raised when the selected plan level is not a known level."""

    def __init__(self, plan_level):
        self.plan_level = plan_level
        super().__init__(f"Invalid plan level: {plan_level!r}")


class MissingPlanInputError(PlannerError):
    """
    Raised when plan generation runs without its upstream inputs.

    Attributes:
        missing: Names of the inputs that were not supplied
    """

    def __init__(self, missing):
        self.missing = tuple(missing)
        super().__init__(
            "Cannot generate a training plan without: " + ", ".join(self.missing)
        )
