from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List

from ..core.config import DEFAULT_PROXY_ENDPOINT


class GenerationRequest(BaseModel):
    """
    Inbound generation request.

    Fields are coerced instead of rejected: anything that is not a string
    becomes "" so that the missing-fields check can report it uniformly.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    model: str = ""
    system_instruction: str = Field("", alias="systemInstruction")
    user_prompt: str = Field("", alias="userPrompt")
    enable_thinking: bool = Field(False, alias="enableThinking")
    proxy_endpoint: str = Field(DEFAULT_PROXY_ENDPOINT, alias="proxyEndpoint")

    @field_validator("model", mode="before")
    @classmethod
    def _coerce_model(cls, value: Any) -> str:
        return value.strip() if isinstance(value, str) else ""

    @field_validator("system_instruction", "user_prompt", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("enable_thinking", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("proxy_endpoint", mode="before")
    @classmethod
    def _coerce_endpoint(cls, value: Any) -> str:
        endpoint = value.strip() if isinstance(value, str) else ""
        return endpoint or DEFAULT_PROXY_ENDPOINT

    def missing_required_fields(self) -> bool:
        return not (self.model and self.system_instruction.strip() and self.user_prompt.strip())


class GenerationSuccess(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    used_model: str = Field(..., alias="usedModel")


class GenerationFailure(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error: str
    upstream_status: int = Field(..., alias="upstreamStatus")
    upstream_content_type: str = Field("", alias="upstreamContentType")
    detail: Any = None
    tried_models: List[str] = Field(default_factory=list, alias="triedModels")
