"""
API layer. Every surface here calls PlannerService and nothing below it.
"""
