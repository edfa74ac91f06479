"""API routers package."""

from stridelab.routers import athletes, stats, training_load, workouts

__all__ = ["athletes", "stats", "training_load", "workouts"]
