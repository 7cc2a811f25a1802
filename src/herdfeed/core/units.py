"""Unit conversion utilities using pint.

All internal data is stored in metric (SI) units:
- Body weight: kilograms (kg)
- Feed mass and intake: kilograms (kg)
- Ration coefficient: kg feed per kg body weight (dimensionless)

Display units are controlled by settings.display_units:
- "metric": Display as stored (kg)
- "imperial": Convert to pounds (lb)
"""

import pint

from herdfeed.core.config import settings

# Create a unit registry (lazily initialized)
_ureg: pint.UnitRegistry | None = None


def get_ureg() -> pint.UnitRegistry:
    """Get the pint unit registry (lazily initialized)."""
    global _ureg
    if _ureg is None:
        _ureg = pint.UnitRegistry()
    return _ureg


# =============================================================================
# Mass Conversions
# =============================================================================


def kg_to_lb(kg: float) -> float:
    """Convert kilograms to pounds."""
    ureg = get_ureg()
    return (kg * ureg.kilogram).to(ureg.pound).magnitude


def lb_to_kg(lb: float) -> float:
    """Convert pounds to kilograms."""
    ureg = get_ureg()
    return (lb * ureg.pound).to(ureg.kilogram).magnitude


def mass_kg_to_display(kg: float) -> tuple[float, str]:
    """Convert kilograms to display units.

    Args:
        kg: Mass in kilograms

    Returns:
        Tuple of (value, unit_symbol) in display units
    """
    if settings.display_units == "imperial":
        return (kg_to_lb(kg), "lb")
    return (kg, "kg")


def display_to_kg(value: float) -> float:
    """Convert a mass entered in display units back to kilograms."""
    if settings.display_units == "imperial":
        return lb_to_kg(value)
    return value


def format_mass(kg: float, decimals: int = 2) -> str:
    """Format a mass for display.

    Args:
        kg: Mass in kilograms
        decimals: Number of decimal places

    Returns:
        Formatted string like "1.44 kg" or "3.17 lb"
    """
    value, unit = mass_kg_to_display(kg)
    return f"{value:.{decimals}f} {unit}"


def format_ratio(ratio: float) -> str:
    """Format an intake ratio as a percentage like "90%"."""
    return f"{ratio * 100:.0f}%"


# =============================================================================
# Display Unit Info
# =============================================================================


def get_mass_unit() -> str:
    """Get the mass unit symbol for current display settings."""
    return "lb" if settings.display_units == "imperial" else "kg"


def is_imperial() -> bool:
    """Check if display units are imperial."""
    return settings.display_units == "imperial"
