"""HTTP routers."""

from . import auth, categories, orders, products, recipes, users

ALL_ROUTERS = [
    auth.router,
    users.router,
    recipes.router,
    categories.router,
    products.router,
    orders.router,
]
