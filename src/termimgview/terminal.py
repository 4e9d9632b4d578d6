import logging
import sys
from typing import TextIO

logger = logging.getLogger(__name__)


def write_frame(frame: str, stream: TextIO | None = None) -> None:
    """Write a complete frame in one call and flush once, so no partial frame is shown."""
    if stream is None:
        stream = sys.stdout
    stream.write(frame + "\n")
    stream.flush()
    logger.debug("wrote frame of %d characters", len(frame) + 1)
