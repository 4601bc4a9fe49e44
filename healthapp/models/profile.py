"""
Profile Models - Identity and body metrics. BMI is derived, never stored.
"""

from typing import Literal, Optional
from pydantic import Field

from .health import CamelModel

ThemeColor = Literal["blue", "green", "purple", "orange"]


class UserProfile(CamelModel):
    """User profile as persisted on the device."""
    name: str = "Alex"
    height: float = 70  # inches (5'10")
    weight: float = 165  # lbs
    date_of_birth: Optional[str] = ""
    address: Optional[str] = ""
    email: Optional[str] = ""
    profile_photo: Optional[str] = ""
    theme: Optional[ThemeColor] = "blue"


class ProfileUpdate(CamelModel):
    """Partial profile update. Height and weight must be positive when given."""
    name: Optional[str] = Field(None, min_length=1)
    height: Optional[float] = Field(None, gt=0)
    weight: Optional[float] = Field(None, gt=0)
    date_of_birth: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None
    profile_photo: Optional[str] = None
    theme: Optional[ThemeColor] = None


class ProfileIn(UserProfile):
    """Full profile replacement with input validation."""
    name: str = Field(..., min_length=1)
    height: float = Field(..., gt=0)
    weight: float = Field(..., gt=0)


class ProfileView(UserProfile):
    """Profile with its derived BMI fields."""
    bmi: float
    bmi_category: str
