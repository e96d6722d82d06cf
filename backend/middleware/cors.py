from flask_cors import CORS
from flask import request
import logging

logger = logging.getLogger(__name__)

ALLOWED_HEADERS = [
    "Accept",
    "Authorization",
    "Cache-Control",
    "Content-Type",
    "Origin",
    "X-Requested-With",
]


def setup_cors(app):
    """
    Configure CORS for the API from CORS_ORIGINS, with credentials so the
    session cookie travels with cross-origin requests from the web client.
    """
    allowed_origins = app.config.get('CORS_ORIGINS', [])

    CORS(app,
         resources={r"/api/*": {"origins": allowed_origins}},
         allow_headers=ALLOWED_HEADERS,
         expose_headers=["Content-Type", "Content-Disposition"],
         supports_credentials=app.config.get('CORS_SUPPORTS_CREDENTIALS', True),
         methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
         max_age=86400,
    )

    @app.after_request
    def add_api_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'

        # API responses always reflect the latest write
        if request.path.startswith('/api/'):
            response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
            response.headers['Pragma'] = 'no-cache'
            response.headers['Expires'] = '0'

        return response

    logger.info(f"CORS configured with {len(allowed_origins)} allowed origins")
    return app
