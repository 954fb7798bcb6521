"""
Generation settings for the text-generation gateway
"""
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class GenerationSettings(BaseModel):
    """Chat-completion configuration. A missing api_key switches every call to the fallback generator."""
    api_key: Optional[str] = Field(default=None, description="Bearer credential for the chat-completion API")
    base_url: str = Field(default="https://router.huggingface.co/v1", description="OpenAI-compatible API base URL")
    model_name: str = Field(default="deepseek-ai/DeepSeek-V3-0324", description="Chat model id")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Generation temperature")
    top_p: float = Field(default=0.9, ge=0.0, le=1.0, description="Top-p sampling")
    max_tokens_cap: int = Field(default=800, ge=1, description="Upper bound applied to every max_tokens request")
    min_response_chars: int = Field(default=30, ge=0, description="Responses this short or shorter count as failures")
    timeout: Optional[float] = Field(default=120.0, gt=0, description="Request timeout in seconds")

    @field_validator("api_key")
    @classmethod
    def blank_key_is_unset(cls, v):
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v):
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return v.rstrip("/")

    @property
    def has_credentials(self) -> bool:
        return self.api_key is not None
