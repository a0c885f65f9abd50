"""
Celery tasks module
Import all tasks here so Celery can discover them
"""
from . import reminder_tasks

__all__ = ['reminder_tasks']
