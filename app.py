"""
Development entry point.
"""
import logging
import sys

from minisocial import create_app
from minisocial.config import Config

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    stream=sys.stdout
)

app = create_app()


if __name__ == '__main__':
    # For development
    app.run(host='0.0.0.0', port=5000, debug=Config.DEBUG)
