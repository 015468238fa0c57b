"""Recipe categories and the recipe/category link table."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class Category(Base):
    """Model for recipe categories."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(String(500), nullable=True)

    recipe_links: Mapped[list["RecipeCategory"]] = relationship(
        "RecipeCategory", back_populates="category", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"


class RecipeCategory(Base):
    """Junction table linking recipes to categories."""

    __tablename__ = "recipe_categories"

    recipe_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True
    )
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True
    )

    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="category_links")
    category: Mapped["Category"] = relationship("Category", back_populates="recipe_links")

    def __repr__(self) -> str:
        return f"<RecipeCategory(recipe_id={self.recipe_id}, category_id={self.category_id})>"
