import subprocess
import os
import logging

from yummio.core.logging_config import setup_logging

setup_logging(logging.INFO)
logger = logging.getLogger(__name__)


def run():
    port = os.getenv("YUMMIO_PORT", "8000")
    logger.info("🚀 Starting Yummio Measurements API...")

    backend = subprocess.Popen(
        ["uvicorn", "yummio.main:app", "--reload", "--port", port]
    )

    logger.info(f"   👉 API:  http://localhost:{port}")
    logger.info(f"   👉 Docs: http://localhost:{port}/docs")
    logger.info("Press Ctrl+C to stop.")

    try:
        backend.wait()
    except KeyboardInterrupt:
        logger.info("🛑 Stopping API...")
        backend.terminate()
        logger.info("Done.")


if __name__ == "__main__":
    run()
