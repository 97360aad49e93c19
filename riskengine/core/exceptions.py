"""
Risk Engine Exceptions
Typed failures surfaced by the assessment orchestrator
"""

from typing import Any, Dict, Optional


class RiskEngineError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class EntityNotFoundError(RiskEngineError):
    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"Entity not found: {entity_id}")


class ComputationError(RiskEngineError):
    """Scoring failed for one entity; carries the entity id and the original cause."""

    def __init__(self, entity_id: str, cause: Exception):
        self.entity_id = entity_id
        self.cause = cause
        super().__init__(f"Assessment failed for {entity_id}: {cause}")

    def to_payload(self) -> Dict[str, Any]:
        return {
            "error": f"Assessment failed: {self.cause}",
            "entity_id": self.entity_id,
            "cause": type(self.cause).__name__
        }


class InvalidWeightUpdate(RiskEngineError):
    def __init__(
        self,
        model_name: str,
        feature_name: Optional[str],
        value: Optional[float],
        reason: str
    ):
        self.model_name = model_name
        self.feature_name = feature_name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid weight update for {model_name}.{feature_name}={value}: {reason}")
