"""Database models for the recipe API."""

from .base import Base, TimestampMixin, utcnow
from .user import User, Role, Token, TokenType
from .ingredient import Ingredient, RecipeIngredient, normalize_ingredient_name
from .recipe import Recipe, RecipeStep, RecipeStepIngredient, Difficulty, slugify
from .category import Category, RecipeCategory
from .product import Product, ProductCategory
from .order import Order, OrderItem, OrderStatus

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "utcnow",
    "normalize_ingredient_name",
    "slugify",
    # Accounts
    "User",
    "Role",
    "Token",
    "TokenType",
    # Recipes
    "Recipe",
    "RecipeStep",
    "RecipeStepIngredient",
    "Difficulty",
    "Ingredient",
    "RecipeIngredient",
    "Category",
    "RecipeCategory",
    # Commerce
    "Product",
    "ProductCategory",
    "Order",
    "OrderItem",
    "OrderStatus",
]
