"""Recipe model with its ordered steps and per-step ingredient amounts."""

import enum

from sqlalchemy import Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


def slugify(name: str) -> str:
    """Build the URL slug for a recipe name.

    Lowercases and replaces every space with a hyphen. Collisions are not
    resolved; two recipes may share a slug.
    """
    return name.lower().replace(" ", "-")


class Difficulty(str, enum.Enum):
    """How hard a recipe is to cook."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class Recipe(Base, TimestampMixin):
    """Model for storing recipes."""

    __tablename__ = "recipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    prep_time: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cooking_time: Mapped[int | None] = mapped_column(Integer, nullable=True)
    servings: Mapped[int | None] = mapped_column(Integer, nullable=True)
    difficulty: Mapped[Difficulty] = mapped_column(Enum(Difficulty), nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="recipes")
    ingredients: Mapped[list["RecipeIngredient"]] = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.id",
    )
    steps: Mapped[list["RecipeStep"]] = relationship(
        "RecipeStep",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeStep.id",
    )
    category_links: Mapped[list["RecipeCategory"]] = relationship(
        "RecipeCategory",
        back_populates="recipe",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, slug='{self.slug}')>"


class RecipeStep(Base):
    """One instruction of a recipe.

    Rows are read back in insertion order; ``step`` is the caller's label and
    is not checked for gaps or duplicates.
    """

    __tablename__ = "recipe_steps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    step: Mapped[int] = mapped_column(Integer, nullable=False)
    instruction: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="steps")
    step_ingredients: Mapped[list["RecipeStepIngredient"]] = relationship(
        "RecipeStepIngredient",
        back_populates="recipe_step",
        cascade="all, delete-orphan",
        order_by="RecipeStepIngredient.id",
    )

    def __repr__(self) -> str:
        return f"<RecipeStep(id={self.id}, recipe_id={self.recipe_id}, step={self.step})>"


class RecipeStepIngredient(Base):
    """Amount of a recipe ingredient used in a single step."""

    __tablename__ = "recipe_step_ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_step_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("recipe_steps.id", ondelete="CASCADE"), nullable=False
    )
    recipe_ingredient_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("recipe_ingredients.id", ondelete="CASCADE"), nullable=False
    )
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(50), nullable=False)
    observation: Mapped[str | None] = mapped_column(String(255), nullable=True)

    recipe_step: Mapped["RecipeStep"] = relationship(
        "RecipeStep", back_populates="step_ingredients"
    )
    recipe_ingredient: Mapped["RecipeIngredient"] = relationship(
        "RecipeIngredient", back_populates="step_ingredients"
    )

    def __repr__(self) -> str:
        return f"<RecipeStepIngredient(step_id={self.recipe_step_id}, recipe_ingredient_id={self.recipe_ingredient_id})>"
