# course_service/__init__.py
"""Course API service: CRUD over the courses collection plus popularity and instructor rankings."""

__version__ = "1.0.0"
