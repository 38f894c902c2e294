import logging

from fastapi import FastAPI

from backend.config import get_config
from backend.llm import LLM, EchoLLM, HttpLLM
from backend.routes import router

logger = logging.getLogger(__name__)


def build_llm(config: dict) -> LLM:
    if config["provider_format"] == "echo":
        return EchoLLM()
    if not config["api_key"]:
        logger.warning("API_KEY is not set; chat replies will likely fail")
    return HttpLLM(
        provider_url=config["provider_url"],
        api_key=config["api_key"],
        provider_format=config["provider_format"],
        model=config["model"],
        timeout=config["timeout"],
        max_tokens=config["max_tokens"],
    )


def create_app(config: dict | None = None, llm: LLM | None = None) -> FastAPI:
    resolved = config or get_config()

    app = FastAPI(title="Quest Chat")
    app.state.config = resolved
    app.state.llm = llm or build_llm(resolved)
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses environment config)
app = create_app()
