"""
Goal calculator used by every path that writes a user's goals
(profile update, weekly job, manual recalculation).

    maintenance_calories = round(weight_kg * 1.9 * 14)
    protein_goal         = round(weight_kg * 1.7)
"""
import math
from dataclasses import dataclass

PROTEIN_PER_KG = 1.7
FAT_LOSS_DEFICIT = 500


@dataclass(frozen=True)
class GoalTargets:
    maintenance_calories: int
    protein_goal: int


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_maintenance_calories(weight_kg: float) -> int:
    return round_half_up(weight_kg * 1.9 * 14)


def calculate_protein_goal(weight_kg: float) -> int:
    return round_half_up(weight_kg * PROTEIN_PER_KG)


def calculate_goals(weight_kg) -> GoalTargets | None:
    """Returns None when there is no usable weight; callers skip the update."""
    if not weight_kg or not math.isfinite(weight_kg) or weight_kg <= 0:
        return None
    return GoalTargets(
        maintenance_calories=calculate_maintenance_calories(weight_kg),
        protein_goal=calculate_protein_goal(weight_kg),
    )


def calorie_goal(maintenance_calories):
    """Daily intake target for the fixed fat-loss deficit."""
    if maintenance_calories is None:
        return None
    return maintenance_calories - FAT_LOSS_DEFICIT
