"""
Reference catalog entities: exercise types, metcon types and movement types.

Catalog rows are shared by every user. They are deactivated instead of
deleted once a lift, workout or movement references them.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

MAX_NAME_LENGTH = 100
MAX_CATEGORY_LENGTH = 50
MAX_DESCRIPTION_LENGTH = 200

MeasurementType = Literal["Reps", "Distance"]


class CatalogItem(BaseModel):
    """Fields shared by every catalog entry."""

    id: Optional[int] = Field(default=None, description="Catalog ID")
    name: str = Field(default="", description="Display name, unique per catalog")
    is_active: bool = Field(default=True)

    def has_valid_name(self) -> bool:
        name = (self.name or "").strip()
        return 0 < len(name) <= MAX_NAME_LENGTH


class ExerciseType(CatalogItem):
    """
    A strength exercise, e.g. "Back Squat" in category "Squat".

    Examples:
        >>> ExerciseType(name="Back Squat", category="Squat").has_valid_category()
        True
    """

    category: str = Field(default="", description="Grouping, e.g. 'Squat'")

    def has_valid_category(self) -> bool:
        category = (self.category or "").strip()
        return 0 < len(category) <= MAX_CATEGORY_LENGTH


class MetconType(CatalogItem):
    """A metcon format such as AMRAP, EMOM or For Time."""

    description: Optional[str] = Field(default=None)

    def has_valid_description(self) -> bool:
        return self.description is None or len(self.description) <= MAX_DESCRIPTION_LENGTH


class MovementType(CatalogItem):
    """A metcon movement measured either in reps or in distance."""

    category: str = Field(default="", description="Grouping, e.g. 'Gymnastics'")
    measurement_type: MeasurementType = Field(default="Reps")

    def has_valid_category(self) -> bool:
        category = (self.category or "").strip()
        return 0 < len(category) <= MAX_CATEGORY_LENGTH

    @property
    def is_rep_based(self) -> bool:
        return self.measurement_type == "Reps"

    @property
    def is_distance_based(self) -> bool:
        return self.measurement_type == "Distance"
