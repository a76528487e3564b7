"""
Launch the draft synthesis API locally.

Run `python run_server_local.py` in the terminal to start uvicorn and serve
the Swagger UI at `http://<SERVER_HOST>:<SERVER_PORT>/docs` (defaults in
`resume_synth.config`).
"""
import signal
import sys

import uvicorn

from resume_synth.config import SYNTH_DEFAULTS
from resume_synth.logging import LoggerFactory

logger = LoggerFactory().get_logger(name=__name__, logger_type="default", console=True)


def main():
    # Run uvicorn programmatically so Ctrl+C triggers its own graceful shutdown
    config = uvicorn.Config(
        "api.server:app",
        host=SYNTH_DEFAULTS.SERVER_HOST,
        port=SYNTH_DEFAULTS.SERVER_PORT,
        reload=True,
    )
    server = uvicorn.Server(config)

    def handle_exit(sig, frame):
        logger.info("Shutting down draft synthesis API...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_exit)
    signal.signal(signal.SIGTERM, handle_exit)

    logger.info(f"Serving draft synthesis API on {SYNTH_DEFAULTS.SERVER_HOST}:{SYNTH_DEFAULTS.SERVER_PORT}")
    server.run()
    logger.info("Server stopped cleanly.")

if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received. Exiting...")
        sys.exit(0)
