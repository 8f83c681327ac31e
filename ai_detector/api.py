import logging
from datetime import datetime

from flask import Flask, request, jsonify, current_app
from flask_cors import CORS

from .detector import AIImageDetectionPipeline
from .exceptions import DetectionError, InvalidInputError

logger = logging.getLogger("ai_detector")


def _pipeline() -> AIImageDetectionPipeline:
    return current_app.config["PIPELINE"]


def health_check():
    """Simple health check endpoint"""
    pipeline = _pipeline()
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "providers": pipeline.llm_manager.providers,
        "cache_size": len(pipeline.cache)
    })


def get_providers():
    """Get available model providers"""
    llm_manager = _pipeline().llm_manager
    return jsonify({
        "providers": llm_manager.providers,
        "default_provider": llm_manager.default_provider
    })


def analyze_url():
    """API endpoint to analyze an image from a URL"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data.get('url'):
        return jsonify({"error": "Image URL is required"}), 400

    try:
        result = _pipeline().analyze_image_url(data['url'], data.get('provider'))
    except InvalidInputError as e:
        return jsonify({"error": str(e)}), 400
    except DetectionError as e:
        logger.error(f"Error analyzing image: {str(e)}")
        return jsonify({"error": str(e) or "Failed to analyze image"}), 500

    return jsonify(result)


def method_not_allowed(error):
    return jsonify({"error": "Method not allowed"}), 405


def create_app(pipeline: AIImageDetectionPipeline) -> Flask:
    """Build the Flask application around an explicitly constructed pipeline"""
    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes
    app.config["PIPELINE"] = pipeline

    app.add_url_rule('/health', view_func=health_check, methods=['GET'])
    app.add_url_rule('/providers', view_func=get_providers, methods=['GET'])
    app.add_url_rule('/api/analyze-url', view_func=analyze_url, methods=['POST'])
    app.register_error_handler(405, method_not_allowed)

    return app


def run_api_server(pipeline: AIImageDetectionPipeline, host='0.0.0.0', port=5000):
    """Run the API server"""
    app = create_app(pipeline)

    logger.info(f"Starting AI image detection API server on {host}:{port}")
    app.run(host=host, port=port)
