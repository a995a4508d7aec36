from .step_ingredient_matcher import StepIngredientMatcher, compute_step_mapping

__all__ = ["StepIngredientMatcher", "compute_step_mapping"]
