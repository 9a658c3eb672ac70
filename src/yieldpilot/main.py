"""Main entry point - runs the API server."""

import logging

import uvicorn

from yieldpilot.config import get_settings

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    """Configure root logging for the process."""
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # web3/httpx are chatty at DEBUG
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("web3").setLevel(logging.INFO)


def main():
    """Main entry point."""
    settings = get_settings()
    configure_logging(settings.debug)

    logger.info("Starting Yieldpilot...")
    logger.info(f"Environment: {settings.environment}")
    if not settings.hyperevm_rpc_url:
        logger.warning("HYPEREVM_RPC_URL not set - deposit building disabled")
    if not (settings.gluex_api_key and settings.gluex_unique_pid):
        logger.warning("GLUEX_API_KEY/GLUEX_UNIQUE_PID not set - deposit building disabled")

    logger.info(f"Starting API server on {settings.api_host}:{settings.api_port}")
    uvicorn.run(
        "yieldpilot.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
