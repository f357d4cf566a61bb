from functools import lru_cache

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from heartwise.config import settings
from heartwise.errors import GatewayFailure
from heartwise.inference.base import InferenceRequest, StructuredInferenceGateway
from heartwise.logger import get_logger

logger = get_logger(__name__)

SYSTEM_PROMPT = """
You are a cardiac risk assistant for a smartwatch demo.
Answer only through the structured output you are given, filling every field.
Risk levels are exactly one of: low, medium, high.
"""


@lru_cache(maxsize=4)
def _build_llm(model_name: str, temperature: float, timeout: float, api_key: str) -> ChatOpenAI:
    return ChatOpenAI(
        model=model_name,
        temperature=temperature,   # deterministic output for the same prompt
        timeout=timeout,
        max_retries=0,             # failures surface immediately, the caller decides whether to retry
        api_key=api_key,
    )


class LangChainGateway(StructuredInferenceGateway):
    """Structured inference backed by an OpenAI chat model through LangChain."""

    name = "openai"

    def __init__(self, model_name: str = None, temperature: float = None, timeout: float = None):
        self.model_name = model_name or settings.LLM_MODEL
        self.temperature = settings.LLM_TEMPERATURE if temperature is None else temperature
        self.timeout = timeout or settings.LLM_TIMEOUT_SECONDS

    def _llm(self, capability: str) -> ChatOpenAI:
        if not settings.OPENAI_API_KEY:
            raise GatewayFailure(capability, "OPENAI_API_KEY is not set")
        return _build_llm(self.model_name, self.temperature, self.timeout, settings.OPENAI_API_KEY)

    async def _invoke(self, request: InferenceRequest):
        structured_llm = self._llm(request.capability).with_structured_output(
            request.output_model, method="function_calling"
        )
        messages = [
            SystemMessage(content=SYSTEM_PROMPT.strip()),
            HumanMessage(content=request.prompt.strip()),
        ]
        logger.debug(f"Sending {request.capability} prompt to {self.model_name}")
        return await structured_llm.ainvoke(messages)
