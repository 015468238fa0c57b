"""Request and response schemas for recipes."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from ..models import Difficulty
from .common import CamelModel


class IngredientInput(CamelModel):
    name: str = Field(..., min_length=1, json_schema_extra={"example": "Egg"})
    quantity: float = Field(..., gt=0, json_schema_extra={"example": 2})
    unit: str = Field(..., min_length=1, json_schema_extra={"example": "pcs"})

    @field_validator("name", "unit")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class StepIngredientInput(CamelModel):
    """Amount of a recipe ingredient used in one step.

    The ingredient is referenced by exactly one of ``ingredient_index``
    (position in the recipe's ``ingredients`` list), ``ingredient_name`` or
    ``recipe_ingredient_id`` (an id produced by the same write).
    """

    ingredient_index: Optional[int] = Field(default=None, ge=0)
    ingredient_name: Optional[str] = None
    recipe_ingredient_id: Optional[int] = None
    quantity: float = Field(..., gt=0)
    unit: str = Field(..., min_length=1)
    observation: Optional[str] = None

    @model_validator(mode="after")
    def one_reference(self):
        refs = [
            self.ingredient_index is not None,
            self.ingredient_name is not None,
            self.recipe_ingredient_id is not None,
        ]
        if sum(refs) != 1:
            raise ValueError(
                "exactly one of ingredientIndex, ingredientName or recipeIngredientId is required"
            )
        return self


class InstructionInput(CamelModel):
    step: int
    instruction: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    step_ingredients: List[StepIngredientInput] = Field(default_factory=list)


class RecipeCreate(CamelModel):
    name: str = Field(..., min_length=1, json_schema_extra={"example": "Boiled Eggs"})
    description: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    prep_time: Optional[int] = Field(default=None, ge=0)
    cooking_time: Optional[int] = Field(default=None, ge=0)
    servings: Optional[int] = Field(default=None, ge=1)
    difficulty: Difficulty
    categories: List[str] = Field(default_factory=list)
    ingredients: List[IngredientInput] = Field(..., min_length=1)
    instructions: List[InstructionInput] = Field(..., min_length=1)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v


class RecipeUpdate(CamelModel):
    """Scalar fields and category links; unset fields are left untouched."""

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    prep_time: Optional[int] = Field(default=None, ge=0)
    cooking_time: Optional[int] = Field(default=None, ge=0)
    servings: Optional[int] = Field(default=None, ge=1)
    difficulty: Optional[Difficulty] = None
    categories: Optional[List[str]] = None


class RecipeCategoryResponse(CamelModel):
    id: int
    name: str


class RecipeStepIngredientResponse(CamelModel):
    id: int
    recipe_ingredient_id: int
    quantity: float
    unit: str
    observation: str


class RecipeStepResponse(CamelModel):
    id: int
    step: int
    instruction: str
    image_url: str
    video_url: str
    step_ingredients: List[RecipeStepIngredientResponse]


class RecipeIngredientResponse(CamelModel):
    id: int
    name: str
    quantity: float
    unit: str


class RecipeResponse(CamelModel):
    id: int
    slug: str
    name: str
    description: str
    image_url: str
    video_url: str
    prep_time: Optional[int]
    cooking_time: Optional[int]
    servings: Optional[int]
    difficulty: Difficulty
    user_id: int
    created_at: datetime
    updated_at: datetime
    categories: List[RecipeCategoryResponse]
    steps: List[RecipeStepResponse]
    ingredients: List[RecipeIngredientResponse]
