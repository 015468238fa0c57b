"""Normalized ingredient model and the recipe junction table."""

from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


def normalize_ingredient_name(name: str) -> str:
    """Normalize ingredient names for matching.

    " Tomato " and "tomato" resolve to the same row.
    """
    return name.strip().lower()


class Ingredient(Base):
    """Single source of truth for each unique ingredient, shared across recipes."""

    __tablename__ = "ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    # Relationships
    recipe_ingredients: Mapped[list["RecipeIngredient"]] = relationship(
        "RecipeIngredient", back_populates="ingredient"
    )

    def __init__(self, **kwargs):
        if "name" in kwargs:
            kwargs["name"] = normalize_ingredient_name(kwargs["name"])
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<Ingredient(id={self.id}, name='{self.name}')>"


class RecipeIngredient(Base):
    """Junction table linking recipes to ingredients with an amount."""

    __tablename__ = "recipe_ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    ingredient_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("ingredients.id"), nullable=False
    )
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(50), nullable=False)

    # Relationships
    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="ingredients")
    ingredient: Mapped["Ingredient"] = relationship(
        "Ingredient", back_populates="recipe_ingredients"
    )
    step_ingredients: Mapped[list["RecipeStepIngredient"]] = relationship(
        "RecipeStepIngredient",
        back_populates="recipe_ingredient",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<RecipeIngredient(recipe_id={self.recipe_id}, ingredient_id={self.ingredient_id})>"
