"""
Rule-based soil condition assessment.

Rules are checked in priority order and the first match wins. A reading
that is None never satisfies a comparison, so missing values fall through
to the next rule and ultimately to HEALTHY.
"""

from typing import Optional

from app.models.enums import SoilVerdict

ACIDIC_PH_BELOW = 5.5
ALKALINE_PH_ABOVE = 7.5
DRY_MOISTURE_BELOW = 30.0
WET_MOISTURE_ABOVE = 80.0


def _below(value: Optional[float], threshold: float) -> bool:
    return value is not None and value < threshold


def _above(value: Optional[float], threshold: float) -> bool:
    return value is not None and value > threshold


def evaluate_soil(ph: Optional[float], moisture: Optional[float]) -> SoilVerdict:
    """
    Map a soil reading to a verdict.

    Args:
        ph: Soil pH
        moisture: Soil moisture in percent

    Returns:
        The first matching SoilVerdict
    """
    if _below(ph, ACIDIC_PH_BELOW):
        return SoilVerdict.ACIDIC
    if _above(ph, ALKALINE_PH_ABOVE):
        return SoilVerdict.ALKALINE
    if _below(moisture, DRY_MOISTURE_BELOW):
        return SoilVerdict.LOW_MOISTURE
    if _above(moisture, WET_MOISTURE_ABOVE):
        return SoilVerdict.TOO_WET
    return SoilVerdict.HEALTHY
