"""
Structured inference contract.

A gateway takes a named capability, the structured input for it, the rendered
prompt and the pydantic model the answer must conform to. Whatever the backend
returns is validated against that model before anyone else sees it.
"""

from abc import ABC, abstractmethod
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from heartwise.errors import GatewayFailure, ValidationMismatch
from heartwise.logger import get_logger

logger = get_logger(__name__)

OutputT = TypeVar("OutputT", bound=BaseModel)


class InferenceRequest(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    capability: str
    payload: BaseModel
    prompt: str
    output_model: Type[BaseModel]


def validate_output(capability: str, raw: Any, output_model: Type[OutputT]) -> OutputT:
    """Coerce a raw backend answer into ``output_model`` or raise ValidationMismatch."""
    if raw is None:
        raise ValidationMismatch(capability, "backend returned no output")
    if isinstance(raw, BaseModel):
        raw = raw.model_dump()
    try:
        return output_model.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Output for {capability} failed validation: {e.errors()}")
        raise ValidationMismatch(capability, f"output violates {output_model.__name__}: {e}") from e


class StructuredInferenceGateway(ABC):
    """Backend-agnostic entry point used by the flows."""

    name = "abstract"

    async def generate(self, request: InferenceRequest) -> BaseModel:
        logger.info(f"Invoking {request.capability} on the {self.name} backend")
        try:
            raw = await self._invoke(request)
        except GatewayFailure:
            raise
        except Exception as e:
            logger.error(f"{request.capability} failed on the {self.name} backend: {e}")
            raise GatewayFailure(request.capability, str(e) or type(e).__name__) from e
        return validate_output(request.capability, raw, request.output_model)

    @abstractmethod
    async def _invoke(self, request: InferenceRequest) -> Any:
        """Return the backend's raw answer: a dict or a pydantic model."""
        pass
