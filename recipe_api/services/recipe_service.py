"""Recipe creation, listing and maintenance."""

import logging

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session, joinedload, selectinload

from ..database import unit_of_work
from ..errors import (
    ForbiddenError,
    InternalError,
    NotFoundError,
    RecipeCreationError,
    ValidationFailedError,
)
from ..mappers import recipe_to_response
from ..models import (
    Category,
    Ingredient,
    Recipe,
    RecipeCategory,
    RecipeIngredient,
    RecipeStep,
    RecipeStepIngredient,
    User,
    normalize_ingredient_name,
    slugify,
)
from ..pagination import create_paginated, page_offset
from ..schemas.common import Paginated
from ..schemas.recipe import (
    RecipeCreate,
    RecipeResponse,
    RecipeUpdate,
    StepIngredientInput,
)

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_CONFLICT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def upsert_ingredient(db_session: Session, name: str) -> int:
    """Create-or-fetch an ingredient by normalized name and return its id.

    The insert is a single conditional statement, so two transactions adding
    the same name concurrently both end up with the one existing row.
    """
    dialect = db_session.get_bind().dialect.name
    insert = _CONFLICT_INSERTS.get(dialect)
    if insert is None:
        raise InternalError(f"Ingredient upsert is not supported on {dialect}")

    normalized = normalize_ingredient_name(name)
    db_session.execute(
        insert(Ingredient)
        .values(name=normalized)
        .on_conflict_do_nothing(index_elements=["name"])
    )
    return db_session.scalar(select(Ingredient.id).where(Ingredient.name == normalized))


def _aggregate_options(joined: bool):
    """Loader options for the full recipe aggregate.

    ``joined`` loads everything in one statement; list queries use
    select-in loading so LIMIT/OFFSET apply to recipes, not joined rows.
    """
    load = joinedload if joined else selectinload
    return (
        load(Recipe.category_links).joinedload(RecipeCategory.category),
        load(Recipe.ingredients).joinedload(RecipeIngredient.ingredient),
        load(Recipe.steps).joinedload(RecipeStep.step_ingredients),
    )


class RecipeService:
    """Recipe operations bound to one database session."""

    def __init__(self, db: Session):
        self.db = db

    # =========================================================================
    # Creation
    # =========================================================================

    def create(self, payload: RecipeCreate, user_id: int) -> RecipeResponse:
        """Create a recipe with its ingredients, steps and step ingredients.

        Every row is written in one unit of work; a failure at any point
        leaves no trace of the recipe.
        """
        slug = slugify(payload.name)

        with unit_of_work(self.db):
            recipe = Recipe(
                slug=slug,
                name=payload.name,
                description=payload.description,
                image_url=payload.image_url,
                video_url=payload.video_url,
                prep_time=payload.prep_time,
                cooking_time=payload.cooking_time,
                servings=payload.servings,
                difficulty=payload.difficulty,
                user_id=user_id,
            )
            self.db.add(recipe)
            self.db.flush()

            created = self._add_ingredients(recipe.id, payload)
            self._link_categories(recipe, payload.categories)
            self._add_steps(recipe.id, payload, created)

            loaded = self._load(recipe.id)
            if loaded is None:
                logger.error(f"Recipe id={recipe.id} could not be read back after writing")
                raise RecipeCreationError()
            response = recipe_to_response(loaded)

        logger.info(
            f"Created recipe id={response.id} slug='{slug}' "
            f"({len(response.ingredients)} ingredients, {len(response.steps)} steps)"
        )
        return response

    def _add_ingredients(self, recipe_id: int, payload: RecipeCreate) -> list[RecipeIngredient]:
        created = []
        for item in payload.ingredients:
            ingredient_id = upsert_ingredient(self.db, item.name)
            row = RecipeIngredient(
                recipe_id=recipe_id,
                ingredient_id=ingredient_id,
                quantity=item.quantity,
                unit=item.unit,
            )
            self.db.add(row)
            created.append(row)
        self.db.flush()
        return created

    def _add_steps(
        self, recipe_id: int, payload: RecipeCreate, created: list[RecipeIngredient]
    ) -> None:
        # Names map to the first recipe ingredient using them
        by_name: dict[str, RecipeIngredient] = {}
        for item, row in zip(payload.ingredients, created):
            by_name.setdefault(normalize_ingredient_name(item.name), row)
        created_ids = {row.id for row in created}

        # Caller's order is the persistence order
        for instruction in payload.instructions:
            step = RecipeStep(
                recipe_id=recipe_id,
                step=instruction.step,
                instruction=instruction.instruction,
                image_url=instruction.image_url,
                video_url=instruction.video_url,
            )
            self.db.add(step)
            self.db.flush()

            if instruction.step_ingredients:
                self.db.add_all([
                    RecipeStepIngredient(
                        recipe_step_id=step.id,
                        recipe_ingredient_id=self._resolve_reference(
                            ref, created, by_name, created_ids
                        ),
                        quantity=ref.quantity,
                        unit=ref.unit,
                        observation=ref.observation,
                    )
                    for ref in instruction.step_ingredients
                ])
                self.db.flush()

    @staticmethod
    def _resolve_reference(
        ref: StepIngredientInput,
        created: list[RecipeIngredient],
        by_name: dict[str, RecipeIngredient],
        created_ids: set[int],
    ) -> int:
        """Find the recipe ingredient a step ingredient points at."""
        if ref.ingredient_index is not None:
            if ref.ingredient_index >= len(created):
                raise ValidationFailedError(
                    f"ingredientIndex {ref.ingredient_index} is out of range"
                )
            return created[ref.ingredient_index].id
        if ref.ingredient_name is not None:
            row = by_name.get(normalize_ingredient_name(ref.ingredient_name))
            if row is None:
                raise ValidationFailedError(
                    f"Step ingredient '{ref.ingredient_name}' is not an ingredient of this recipe"
                )
            return row.id
        if ref.recipe_ingredient_id not in created_ids:
            raise ValidationFailedError(
                f"recipeIngredientId {ref.recipe_ingredient_id} does not belong to this recipe"
            )
        return ref.recipe_ingredient_id

    def _link_categories(self, recipe: Recipe, names: list[str]) -> None:
        """Replace the recipe's category links with the named categories."""
        wanted = list(dict.fromkeys(n.strip() for n in names if n.strip()))
        categories = []
        if wanted:
            categories = self.db.scalars(
                select(Category).where(Category.name.in_(wanted))
            ).all()
            missing = set(wanted) - {c.name for c in categories}
            if missing:
                raise ValidationFailedError(
                    f"Unknown categories: {', '.join(sorted(missing))}"
                )
        # Links that survive are reused so their (recipe_id, category_id) key stays put
        existing = {link.category_id: link for link in recipe.category_links}
        recipe.category_links = [
            existing.get(c.id) or RecipeCategory(category=c) for c in categories
        ]
        self.db.flush()

    # =========================================================================
    # Reads
    # =========================================================================

    def _load(self, recipe_id: int) -> Recipe | None:
        stmt = (
            select(Recipe)
            .where(Recipe.id == recipe_id)
            .options(*_aggregate_options(joined=True))
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def _get_or_404(self, recipe_id: int) -> Recipe:
        recipe = self._load(recipe_id)
        if recipe is None:
            raise NotFoundError("Recipe not found")
        return recipe

    def get(self, recipe_id: int) -> RecipeResponse:
        return recipe_to_response(self._get_or_404(recipe_id))

    def get_by_slug(self, slug: str) -> RecipeResponse:
        """Newest recipe carrying ``slug``; slugs are not unique."""
        stmt = (
            select(Recipe)
            .where(Recipe.slug == slug)
            .order_by(Recipe.created_at.desc(), Recipe.id.desc())
            .limit(1)
            .options(*_aggregate_options(joined=False))
        )
        recipe = self.db.scalars(stmt).first()
        if recipe is None:
            raise NotFoundError("Recipe not found")
        return recipe_to_response(recipe)

    def list_recipes(self, page: int, page_size: int) -> Paginated[RecipeResponse]:
        offset = page_offset(page, page_size)
        recipes = self.db.scalars(
            select(Recipe)
            .order_by(Recipe.created_at.desc(), Recipe.id.desc())
            .offset(offset)
            .limit(page_size)
            .options(*_aggregate_options(joined=False))
        ).all()
        total = self.db.scalar(select(func.count()).select_from(Recipe))
        return create_paginated(
            [recipe_to_response(r) for r in recipes], total, page, page_size
        )

    # =========================================================================
    # Updates
    # =========================================================================

    @staticmethod
    def _check_owner(recipe: Recipe, user: User) -> None:
        if recipe.user_id != user.id:
            raise ForbiddenError("You do not own this recipe")

    def update(self, recipe_id: int, payload: RecipeUpdate, user: User) -> RecipeResponse:
        """Replace the supplied scalar fields and category links.

        The slug keeps the value derived at creation.
        """
        with unit_of_work(self.db):
            recipe = self._get_or_404(recipe_id)
            self._check_owner(recipe, user)

            changes = payload.model_dump(exclude_unset=True, exclude={"categories"})
            if "name" in changes and not (changes["name"] or "").strip():
                raise ValidationFailedError("Name is required")
            if "difficulty" in changes and changes["difficulty"] is None:
                raise ValidationFailedError("Difficulty is required")
            for field, value in changes.items():
                setattr(recipe, field, value)
            if payload.categories is not None:
                self._link_categories(recipe, payload.categories)
            self.db.flush()

        logger.info(f"Updated recipe id={recipe_id}")
        return self.get(recipe_id)

    def delete(self, recipe_id: int, user: User) -> RecipeResponse:
        with unit_of_work(self.db):
            recipe = self._get_or_404(recipe_id)
            self._check_owner(recipe, user)
            response = recipe_to_response(recipe)
            self.db.delete(recipe)

        logger.info(f"Deleted recipe id={recipe_id}")
        return response
