"""Flatten loaded ORM rows into response DTOs.

Optional text columns (image/video URLs, step ingredient observations and the
recipe description) come back as empty strings, never null.
"""

from .models import (
    Category,
    Order,
    Product,
    Recipe,
    RecipeIngredient,
    RecipeStep,
    RecipeStepIngredient,
    User,
)
from .schemas.category import CategoryResponse
from .schemas.order import OrderItemResponse, OrderResponse
from .schemas.product import ProductResponse
from .schemas.recipe import (
    RecipeCategoryResponse,
    RecipeIngredientResponse,
    RecipeResponse,
    RecipeStepIngredientResponse,
    RecipeStepResponse,
)
from .schemas.user import UserResponse


def _text(value: str | None) -> str:
    return value or ""


def step_ingredient_to_response(row: RecipeStepIngredient) -> RecipeStepIngredientResponse:
    return RecipeStepIngredientResponse(
        id=row.id,
        recipe_ingredient_id=row.recipe_ingredient_id,
        quantity=row.quantity,
        unit=row.unit,
        observation=_text(row.observation),
    )


def step_to_response(step: RecipeStep) -> RecipeStepResponse:
    return RecipeStepResponse(
        id=step.id,
        step=step.step,
        instruction=step.instruction,
        image_url=_text(step.image_url),
        video_url=_text(step.video_url),
        step_ingredients=[step_ingredient_to_response(si) for si in step.step_ingredients],
    )


def recipe_ingredient_to_response(row: RecipeIngredient) -> RecipeIngredientResponse:
    return RecipeIngredientResponse(
        id=row.id,
        name=row.ingredient.name,
        quantity=row.quantity,
        unit=row.unit,
    )


def recipe_to_response(recipe: Recipe) -> RecipeResponse:
    """Map a fully loaded recipe aggregate to its nested DTO."""
    return RecipeResponse(
        id=recipe.id,
        slug=recipe.slug,
        name=recipe.name,
        description=_text(recipe.description),
        image_url=_text(recipe.image_url),
        video_url=_text(recipe.video_url),
        prep_time=recipe.prep_time,
        cooking_time=recipe.cooking_time,
        servings=recipe.servings,
        difficulty=recipe.difficulty,
        user_id=recipe.user_id,
        created_at=recipe.created_at,
        updated_at=recipe.updated_at,
        categories=[
            RecipeCategoryResponse(id=link.category.id, name=link.category.name)
            for link in recipe.category_links
        ],
        steps=[step_to_response(s) for s in recipe.steps],
        ingredients=[recipe_ingredient_to_response(ri) for ri in recipe.ingredients],
    )


def user_to_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, name=user.name, email=user.email, role=user.role)


def category_to_response(category: Category) -> CategoryResponse:
    return CategoryResponse.model_validate(category)


def product_to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        description=_text(product.description),
        price=product.price,
        stock=product.stock,
        category=product.category,
        images=list(product.images or []),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def order_to_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        user_id=order.user_id,
        total_amount=order.total_amount,
        status=order.status,
        items=[OrderItemResponse.model_validate(item) for item in order.items],
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
