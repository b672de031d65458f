# course_service/__main__.py
from .main import run

run()
