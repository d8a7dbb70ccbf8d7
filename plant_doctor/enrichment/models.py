"""Models for AI care profile enrichment.

A CareProfile is generated on demand for a plant species the app has no
data for. It is unrelated to the diagnostic knowledgebase and is never
merged into it.
"""

from enum import Enum

from pydantic import BaseModel, Field


class PlantCategory(str, Enum):
    """Kind of productive plant."""

    FRUIT = "fruit"
    VEGETABLE = "vegetable"
    HERB = "herb"


class Difficulty(str, Enum):
    """How hard a plant is to grow."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class PestNote(BaseModel):
    """A pest that commonly affects the species."""

    name: str = Field(description="Common pest name (e.g., 'Aphids')")
    symptoms: str = Field(description="What the damage looks like")
    treatment: str = Field(description="How to deal with it")


class CareProfile(BaseModel):
    """Structured growing data for one species.

    This model is used with instructor, so field descriptions double as
    instructions to the LLM.

    Example:
        {
            "species": "Tomato",
            "category": "vegetable",
            "is_perennial": false,
            "difficulty": "Medium",
            "companions": ["Basil", "Marigold"],
            "foes": ["Fennel"],
            "harvest_days": 70,
            ...
        }
    """

    species: str = Field(description="Species or common name")
    category: PlantCategory = Field(description="fruit, vegetable, or herb")
    is_perennial: bool = Field(description="True if the plant lives for more than two years")
    difficulty: Difficulty = Field(description="Easy, Medium, or Hard")
    companions: list[str] = Field(
        default_factory=list,
        description="Species names that help this plant when grown nearby",
    )
    foes: list[str] = Field(
        default_factory=list,
        description="Species names that hinder this plant when grown nearby",
    )
    harvest_days: int = Field(ge=0, description="Days from sowing to first harvest")
    succession_days: int | None = Field(
        default=None,
        ge=1,
        description="How often to sow again for a continuous harvest, in days",
    )
    common_pests: list[PestNote] = Field(default_factory=list)
    fun_fact: str = Field(description="One short, surprising fact")
    why_grow: str = Field(description="One sentence on why a home gardener should grow it")
    care_tips: list[str] = Field(
        default_factory=list,
        description="3-5 short, practical care tips for a damp, mild climate",
    )
