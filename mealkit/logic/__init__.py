"""Core business logic layer.

Subpackages:
- ingredients: name normalization and matching
- units: unit conversion and quantity formatting
- pantry: recipe-to-pantry matching
- cooking: cook-time deduction planner and cook service
- reporting: shared-ingredient analysis
- recipes: recipe similarity and suggestions
- shopping: shopping lists and grocery categories
"""
__all__ = ["ingredients", "units", "pantry", "cooking", "reporting", "recipes", "shopping"]
