from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CycleRecord(BaseModel):
    """A feedback loop found in the causal graph."""

    type: str = Field(..., description="'Reinforcing' or 'Balancing'")
    dominance: int = Field(..., ge=0, le=100, description="Mean |weight| of the loop relative to the strongest edge in the graph")
    nodes: List[str] = Field(..., description="Loop variables in discovery order, without the closing node")
    chain: str = Field(..., description="Display string, e.g. 'A → B → A'")
    weights: List[float] = Field(..., description="Edge weights along the loop")


class Snapshot(BaseModel):
    """Variable values at one integration step."""

    step: int = Field(..., ge=0)
    values: Dict[str, float] = Field(default_factory=dict)


class FiveFactorState(BaseModel):
    """Summary state of the simulated system, each factor in [1, 10]."""

    vitality: float
    cognition: float
    emotion: float
    adaptability: float
    meaning: float


class SimulationOptions(BaseModel):
    """Integration parameters. Step count, step size and damping are required."""

    model_config = ConfigDict(populate_by_name=True)

    steps: int = Field(..., gt=0, description="Number of integration steps")
    dt: float = Field(..., allow_inf_nan=False, description="Step size")
    damping: float = Field(..., allow_inf_nan=False, description="Pull toward each variable's baseline")
    initial_state: Optional[Dict[str, Any]] = Field(
        default=None, alias="initialState", description="Five-factor state used to anchor template variables"
    )

    @field_validator("initial_state", mode="before")
    @classmethod
    def _ignore_non_mapping_state(cls, value: Any) -> Optional[Dict[str, Any]]:
        # Anything other than a mapping leaves the graph unanchored.
        if not isinstance(value, Mapping):
            return None
        return {str(key): item for key, item in value.items()}


class SimulationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    loops_detected: List[CycleRecord] = Field(default_factory=list, alias="loopsDetected")
    time_series: List[Snapshot] = Field(default_factory=list, alias="timeSeries")
    new_state: FiveFactorState = Field(..., alias="newState")

    @property
    def final_values(self) -> Dict[str, float]:
        return dict(self.time_series[-1].values) if self.time_series else {}

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
