import logging
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tool_chat.utils import prompts

logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MAX_TOOL_ITERATIONS = 10


class Config(BaseSettings):
    # --- Transport Settings --- #
    # Aliased fields skip env_prefix; each name is also looked up in .env
    API_KEY: Optional[str] = Field(default=None, validation_alias=AliasChoices("TOOL_CHAT_API_KEY", "OPENROUTER_API_KEY"), description="OpenRouter API key")
    BASE_URL: str = Field(default=OPENROUTER_BASE_URL, description="OpenAI-compatible endpoint to send chat completions to")
    DEFAULT_MODEL: str = Field(default="openai/gpt-4o", description="Model identifier used when --model is not given")
    SITE_URL: Optional[str] = Field(default=None, validation_alias=AliasChoices("TOOL_CHAT_SITE_URL", "OPENROUTER_SITE_URL"), description="Sent as HTTP-Referer for OpenRouter rankings")
    SITE_NAME: Optional[str] = Field(default=None, validation_alias=AliasChoices("TOOL_CHAT_SITE_NAME", "OPENROUTER_SITE_NAME"), description="Sent as X-Title for OpenRouter rankings")

    # --- LLM Generation Settings --- #
    TEMPERATURE: Optional[float] = Field(default=None, description="Generation temperature")
    MAX_TOKENS: Optional[int] = Field(default=None, description="Maximum tokens to generate")
    TOP_P: Optional[float] = Field(default=None, description="Nucleus sampling top-p")
    FREQUENCY_PENALTY: Optional[float] = Field(default=None)
    PRESENCE_PENALTY: Optional[float] = Field(default=None)

    # --- Tool Settings --- #
    TOOLS_ENABLED: bool = Field(default=True, description="Teach the model the CALL_TOOL convention and execute its calls")
    MAX_TOOL_ITERATIONS: Optional[int] = Field(default=DEFAULT_MAX_TOOL_ITERATIONS, description="Maximum tool calls per turn (0 or unset for no limit)")

    # --- UI/Interaction Settings --- #
    VERBOSE: bool = Field(default=False, description="Verbose mode for debugging")
    PLAIN_OUTPUT: bool = Field(default=False, description="Use plain text output without Rich formatting")

    SYSTEM_MESSAGE: str = Field(default=prompts.SYSTEM_MESSAGE)

    model_config = SettingsConfigDict(
        env_prefix="TOOL_CHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra='ignore',
        populate_by_name=True,
    )

    @property
    def tool_iteration_limit(self) -> int | None:
        if not self.MAX_TOOL_ITERATIONS or self.MAX_TOOL_ITERATIONS < 0:
            return None
        return self.MAX_TOOL_ITERATIONS
