"""
Development server entry point
Run the Flask application with: python run.py
"""
from ayurclinic import create_app
import os

# Create Flask app instance
app = create_app()

if __name__ == '__main__':
    host = os.getenv('FLASK_HOST', '0.0.0.0')
    port = int(os.getenv('FLASK_PORT', 5000))
    debug = os.getenv('FLASK_ENV', 'development') == 'development'

    app.logger.info(
        "Starting AyurClinic backend on %s:%s (debug=%s, env=%s)",
        host, port, debug, os.getenv('FLASK_ENV', 'development'),
    )

    app.run(
        host=host,
        port=port,
        debug=debug,
        threaded=True
    )
