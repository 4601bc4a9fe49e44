"""
BMI derivation. BMI is always recomputed from weight and height, never stored
on the profile as ground truth.
"""


def calculate_bmi(weight: float, height: float) -> float:
    """
    Imperial BMI: (weight in pounds * 703) / (height in inches)^2.

    Non-positive weight or height yields 0 rather than an error.
    """
    if height <= 0 or weight <= 0:
        return 0
    return (weight * 703) / (height * height)


def bmi_category(bmi: float) -> str:
    """Four-bucket BMI category."""
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal"
    if bmi < 30:
        return "Overweight"
    return "Obese"
