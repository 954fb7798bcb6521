import math
import os
import re
from typing import Any, Optional

import requests
from dotenv import load_dotenv

from app.utils.exceptions import ExternalServiceError
from app.utils.logging_config import get_logger

load_dotenv()

logger = get_logger(__name__)

HF_API_KEY = os.getenv("HF_API_KEY", "").strip() or None
HF_API_URL = os.getenv("HF_API_URL", "https://router.huggingface.co/v1")
LLM_MODEL = os.getenv("LLM_MODEL", "deepseek-ai/DeepSeek-V3-0324")
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "120"))
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "./uploads")


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (round() would use banker's rounding)"""
    return int(math.floor(value + 0.5))


def safe_int(value: Any, default: int = 0) -> int:
    """Parse the leading integer of a form value such as "5" or "5 years"."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    m = re.match(r"\s*([+-]?\d+)", str(value))
    return int(m.group(1)) if m else default


def format_size(num_bytes: int) -> str:
    return f"{round_half_up(num_bytes / 1024)}KB"


def chat_completion(
    prompt: str,
    api_key: str,
    base_url: str,
    model: str,
    max_tokens: int,
    temperature: float = 0.7,
    top_p: float = 0.9,
    timeout: Optional[float] = None,
) -> str:
    """Send one user message to an OpenAI-compatible chat completion endpoint."""
    url = f"{base_url.rstrip('/')}/chat/completions"
    try:
        resp = requests.post(
            url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            json={
                "model": model,
                "messages": [{"role": "user", "content": prompt}],
                "max_tokens": max_tokens,
                "temperature": temperature,
                "top_p": top_p,
                "stream": False,
            },
            timeout=timeout,
        )
        resp.raise_for_status()
        data = resp.json()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise ExternalServiceError(
            f"Chat completion request failed: {e}", service_name="chat-completion", status_code=status, cause=e
        ) from e
    except (requests.RequestException, ValueError) as e:
        raise ExternalServiceError(
            f"Chat completion request failed: {e}", service_name="chat-completion", cause=e
        ) from e

    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ExternalServiceError(
            "Chat completion response had no message content", service_name="chat-completion", cause=e
        ) from e
    if content is not None and not isinstance(content, str):
        raise ExternalServiceError(
            f"Chat completion content has unsupported type {type(content).__name__}",
            service_name="chat-completion",
        )
    return content or ""
