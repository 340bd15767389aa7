import argparse
import logging
import os
from datetime import datetime

import dotenv

from config import Settings
from server import create_app

logger = logging.getLogger(__name__)


def setup_logging(log_directory="logs", level=logging.INFO):
    if not os.path.exists(log_directory):
        os.makedirs(log_directory)

    log_file = os.path.join(log_directory, f"lights_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log")
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )
    return log_file


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Smart light dashboard')
    parser.add_argument('--host', default='0.0.0.0', help='Interface to bind')
    parser.add_argument('--port', type=int, default=5000, help='Port to listen on')
    parser.add_argument('--log-dir', default='logs', help='Directory for log files')
    parser.add_argument('--debug', action='store_true', help='Run Flask in debug mode')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    dotenv.load_dotenv()
    setup_logging(args.log_dir, logging.DEBUG if args.debug else logging.INFO)

    settings = Settings.from_env()
    logger.info("Starting dashboard on %s:%d (default selector: %s)",
                args.host, args.port, settings.default_selector)

    app = create_app(settings)
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == '__main__':
    main()
