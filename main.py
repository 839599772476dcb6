"""
Main entrypoint: FastAPI server for transaction explanations and the tutor.

Env: ACTIVE_LLM, <PROVIDER>_API_KEY, SOLANA_RPC_URL, JUPITER_API_URL, API_HOST, API_PORT, LOG_LEVEL.

Equivalent: uvicorn backend_txlens.api_server.app:app --host 0.0.0.0 --port 8000
"""

import os

# Configure structured JSON logging before other imports that may log
from backend_txlens.txlens_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Read settings and run the FastAPI server in the main thread."""
    from backend_txlens.config import get_settings

    settings = get_settings()
    if not settings.provider_configured():
        logger.warning(
            "main_llm_not_configured",
            llm=settings.active_llm,
            message="POST /analyze and POST /tutor will return 500 until an API key is set",
        )

    from backend_txlens.api_server.app import app
    import uvicorn

    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
