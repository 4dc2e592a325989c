"""
Weekly planner service.
Weeks and tasks exposed over REST and GraphQL from one MongoDB store.
"""

__version__ = "1.0.0"
