#!/usr/bin/env python3
"""
Cattle Vision - Main Runner

MVC Architecture:
- Models: wire schemas (cattle_vision/models/)
- Views: Flask routes (cattle_vision/views/)
- Controllers: proxy orchestration (cattle_vision/controllers/)

Usage:
    python run.py              # Start the web server
    python run.py --port 5000  # Custom port
    python run.py --debug      # Debug mode
"""
import argparse
import logging

from dotenv import load_dotenv

load_dotenv()


def setup_logging(level_name: str = "INFO", debug: bool = False):
    """Configure logging."""
    level = logging.DEBUG if debug else getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    return logging.getLogger(__name__)


def main():
    """Main entry point."""
    from config import get_settings

    settings = get_settings()

    parser = argparse.ArgumentParser(
        description='Cattle Vision breed classification proxy',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python run.py                    # Start server on port 8000
    python run.py --port 5000        # Start on port 5000
    python run.py --debug            # Enable debug mode
    python run.py --host 127.0.0.1   # Localhost only

Backend (set in .env):
    INFERENCE_URL              - model endpoint; unset means simulated replies
    INFERENCE_API_KEY          - optional bearer token
    REQUIRE_INFERENCE_BACKEND  - answer 503 instead of simulating
        """
    )

    parser.add_argument(
        '--host',
        default=settings.host,
        help=f'Host to bind to (default: {settings.host})'
    )
    parser.add_argument(
        '--port',
        type=int,
        default=settings.port,
        help=f'Port to listen on (default: {settings.port})'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        default=settings.debug,
        help='Enable debug mode'
    )

    args = parser.parse_args()

    logger = setup_logging(settings.log_level, args.debug)

    from cattle_vision.controllers import ClassificationController
    controller = ClassificationController(settings)

    logger.info("=" * 60)
    logger.info("🐄 %s", settings.app_name)
    logger.info("=" * 60)
    logger.info("Backend: %s", controller.backend_mode.value)
    if settings.inference_url:
        logger.info("Inference URL: %s", settings.inference_url)
    logger.info("Host: %s", args.host)
    logger.info("Port: %s", args.port)
    logger.info("Debug: %s", args.debug)
    logger.info("=" * 60)

    from cattle_vision.views import create_app
    app = create_app(controller)

    logger.info("🚀 Starting server at http://%s:%s", args.host, args.port)

    app.run(
        host=args.host,
        port=args.port,
        debug=args.debug
    )


if __name__ == '__main__':
    main()
