# app.py
from flask import Flask, jsonify, request, g
from flask_cors import CORS
from dotenv import load_dotenv
import logging
import sys
import time
from werkzeug.middleware.proxy_fix import ProxyFix

# Load environment variables before Config reads them
load_dotenv()

from config import Config
from routes.bible import bible_bp
from routes.counselor import counselor_bp
from routes.devotional import devotional_bp
from routes.home import home_bp
from routes.narration import narration_bp
from services import get_services

# Configure logging to output to stdout
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def create_app():
    app = Flask(__name__)

    # Use ProxyFix to handle proxy headers properly
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    app.json.sort_keys = False  # Preserve order of keys in JSON responses
    app.json.compact = True
    app.json.ensure_ascii = False
    app.config['MAX_CONTENT_LENGTH'] = 1 * 1024 * 1024
    app.config['CORS_HEADERS'] = 'Content-Type'

    CORS(app, resources={
        r"/api/*": {
            "origins": "*",
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type"],
            "expose_headers": ["Content-Type"]
        }
    })

    # Ensure URLs with or without trailing slashes are handled the same way
    app.url_map.strict_slashes = False

    app.register_blueprint(bible_bp, url_prefix='/api/bible')
    app.register_blueprint(counselor_bp, url_prefix='/api/counselor')
    app.register_blueprint(devotional_bp, url_prefix='/api/devotional')
    app.register_blueprint(home_bp, url_prefix='/api/home')
    app.register_blueprint(narration_bp, url_prefix='/api/narration')

    @app.before_request
    def before_request():
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        duration = time.time() - g.get('start_time', time.time())
        logger.info(f"Request to {request.path} took {duration:.2f} seconds")
        return response

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint reporting the reading cache size"""
        try:
            cached = len(get_services().chapter_loader.cache)
            return jsonify({
                'status': 'healthy',
                'cached_chapters': cached,
                'timestamp': time.time()
            })
        except Exception as e:
            logger.error(f"Health check failed: {str(e)}")
            return jsonify({
                'status': 'unhealthy',
                'error': str(e),
                'timestamp': time.time()
            }), 500

    return app


app = create_app()

if __name__ == '__main__':
    logger.info("Starting Flask server...")
    app.run(debug=True, port=Config.PORT)
