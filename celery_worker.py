#!/usr/bin/env python3
"""
Celery Worker Entry Point
Run with: celery -A celery_worker.celery worker --beat --loglevel=info
Or: python celery_worker.py
"""
from ayurclinic import create_app
from ayurclinic.extensions import celery

# Create Flask app to initialize Celery
app = create_app()

# Import tasks so Celery can discover them
from tasks import reminder_tasks  # noqa: E402,F401

if __name__ == '__main__':
    # For development: run worker with embedded beat
    celery.worker_main([
        'worker',
        '--beat',
        '--loglevel=info',
        '--concurrency=2'
    ])
