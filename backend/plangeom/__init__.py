"""PlanGeom — floor-plan geometry normalization engine."""

__version__ = "0.1.0"
