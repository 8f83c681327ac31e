import sys
import json
import argparse
import logging

from . import configure_logging
from .api import run_api_server
from .client import AnalysisClient
from .config import APP_CONFIG, load_llm_config
from .detector import AIImageDetectionPipeline
from .exceptions import ConfigError, DetectionError
from .media_processor import MediaProcessor

logger = logging.getLogger("ai_detector")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='AI-generated image detector')
    parser.add_argument('--mode', choices=['web', 'analyze'],
                        default='web',
                        help='Run mode: web API server or single URL analysis')
    parser.add_argument('--url', type=str,
                        help='Image URL to analyze (for analyze mode)')
    parser.add_argument('--config', type=str,
                        help='Path to the provider configuration JSON file')
    parser.add_argument('--provider', type=str,
                        help='Model provider to use instead of the configured default')
    parser.add_argument('--mock', action='store_true',
                        help='Use a canned offline analysis instead of calling a model')
    parser.add_argument('--server', type=str,
                        help='Base URL of a running detector server to send the request to')
    parser.add_argument('--host', type=str, default=APP_CONFIG['HOST'])
    parser.add_argument('--port', type=int, default=APP_CONFIG['PORT'])
    parser.add_argument('--log-file', type=str, default=APP_CONFIG['LOG_FILE'],
                        help='Log file path; pass an empty string to log to the console only')
    return parser


def build_pipeline(args) -> AIImageDetectionPipeline:
    llm_config = {} if args.mock else load_llm_config(args.config)
    return AIImageDetectionPipeline(
        llm_config,
        media_processor=MediaProcessor(timeout=APP_CONFIG["FETCH_TIMEOUT"]),
        mock=args.mock
    )


def analyze_url(args) -> dict:
    """Analyze a single URL, either locally or through a remote server"""
    if args.server:
        return AnalysisClient(args.server).analyze_image(args.url)

    return build_pipeline(args).analyze_image_url(args.url, args.provider)


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(log_file=args.log_file or None)

    if args.mode == 'web':
        try:
            run_api_server(build_pipeline(args), host=args.host, port=args.port)
        except ConfigError as e:
            print(f"Error: {e}")
            sys.exit(1)

    elif args.mode == 'analyze':
        if not args.url:
            print("Error: --url is required in analyze mode")
            sys.exit(1)

        try:
            result = analyze_url(args)
        except DetectionError as e:
            print(f"Error analyzing image: {e}")
            sys.exit(1)

        print("Detection Results:")
        print(json.dumps(result, indent=2))


if __name__ == '__main__':
    main()
