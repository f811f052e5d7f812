import logging
import sys

logger = logging.getLogger("cloudant")

handler = logging.StreamHandler(stream=sys.stderr)
handler.setFormatter(
    logging.Formatter("%(asctime)s %(levelname)s - %(name)s - %(message)s"),
)
if logger.hasHandlers():
    logger.handlers.clear()
logger.setLevel(logging.INFO)
logger.addHandler(handler)
