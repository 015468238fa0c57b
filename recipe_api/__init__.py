"""Recipe API: recipes, users, categories, products and orders over HTTP."""

__version__ = "1.0.0"
