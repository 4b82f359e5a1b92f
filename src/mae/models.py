from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

# field name -> data URL (or raw base64); unknown fields are carried but ignored
OutputBundle = Dict[str, Optional[str]]


@dataclass(frozen=True)
class PredictionRequest:
    music_input_url: str
    visualize: bool = True
    sonify: bool = True

    def to_payload(self) -> Dict[str, Any]:
        return {
            "input": {
                "music_input": self.music_input_url,
                "visualize": bool(self.visualize),
                "sonify": bool(self.sonify),
            }
        }


def _opt_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    return v if isinstance(v, str) else str(v)


@dataclass(frozen=True)
class PredictionResponse:
    output: Optional[OutputBundle] = None
    logs: Optional[str] = None
    status: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "PredictionResponse":
        raw = obj.get("output")
        output: Optional[OutputBundle] = None
        if isinstance(raw, dict):
            output = {str(k): (v if isinstance(v, str) else None) for k, v in raw.items()}
        return cls(
            output=output,
            logs=_opt_str(obj.get("logs")),
            status=_opt_str(obj.get("status")),
            error=_opt_str(obj.get("error")),
        )

    @property
    def succeeded(self) -> bool:
        return self.status is None or self.status == "succeeded"
