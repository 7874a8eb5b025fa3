"""Development server entry point.

Production runs under gunicorn:
    gunicorn -c gunicorn_config.py "customer_api:create_app()"
"""
import logging
import os

from customer_api import create_app

app = create_app()

if __name__ == "__main__":
    logging.info("Flask app started")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
