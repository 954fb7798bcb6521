from functools import lru_cache
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from app.models.ai_settings import GenerationSettings
from app.models.models import TaskKind
from app.services.fallback import generate_fallback
from app.utils.exceptions import ConfigurationError, ExternalServiceError
from app.utils.logging_config import PerformanceMonitor, get_logger
from app.utils.utils import HF_API_KEY, HF_API_URL, LLM_MODEL, LLM_TIMEOUT, chat_completion

logger = get_logger(__name__)


class GenerationGateway:
    """Prefers the chat-completion API, always answers via the fallback generator when it cannot."""

    def __init__(self, settings: GenerationSettings):
        self.settings = settings

    def generate(self, prompt: str, max_tokens: int = 1000, task: Optional[TaskKind] = None) -> str:
        if not self.settings.has_credentials:
            logger.debug("No generation API key configured, using fallback generator")
            return generate_fallback(prompt, task)

        try:
            with PerformanceMonitor("chat completion", logger, threshold_ms=10000):
                content = chat_completion(
                    prompt,
                    api_key=self.settings.api_key,
                    base_url=self.settings.base_url,
                    model=self.settings.model_name,
                    max_tokens=min(max_tokens, self.settings.max_tokens_cap),
                    temperature=self.settings.temperature,
                    top_p=self.settings.top_p,
                    timeout=self.settings.timeout,
                )
        except ExternalServiceError as e:
            logger.warning(f"Model {self.settings.model_name} failed: {e.message}", extra={"error_code": e.error_code})
            return generate_fallback(prompt, task)

        result = content.strip()
        if len(result) > self.settings.min_response_chars:
            return result

        logger.warning(
            f"Model {self.settings.model_name} returned {len(result)} characters, using fallback generator"
        )
        return generate_fallback(prompt, task)


def settings_from_env() -> GenerationSettings:
    try:
        return GenerationSettings(
            api_key=HF_API_KEY,
            base_url=HF_API_URL,
            model_name=LLM_MODEL,
            timeout=LLM_TIMEOUT,
        )
    except PydanticValidationError as e:
        raise ConfigurationError("Invalid generation settings", config_key="HF_API_URL", cause=e) from e


@lru_cache(maxsize=1)
def get_gateway() -> GenerationGateway:
    settings = settings_from_env()
    logger.info(
        f"Generation gateway ready - model: {settings.model_name}, "
        f"mode: {'remote' if settings.has_credentials else 'fallback only'}"
    )
    return GenerationGateway(settings)
