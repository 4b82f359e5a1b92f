from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

KIND_JSON = "json"
KIND_BINARY = "binary"

ERROR_FILENAME = "_error_analyzer_result_content.txt"


@dataclass(frozen=True)
class ArtifactSpec:
    field: str
    filename: str
    kind: str = KIND_BINARY


def _stem(prefix: str, name: str) -> ArtifactSpec:
    return ArtifactSpec(field=f"{prefix}_{name}", filename=f"{prefix}_{name}.wav")


ARTIFACTS: Tuple[ArtifactSpec, ...] = (
    ArtifactSpec(field="analyzer_result", filename="analysis.json", kind=KIND_JSON),
    ArtifactSpec(field="visualization", filename="visualization.png"),
    *(_stem("demucs", n) for n in ("bass", "drums", "guitar", "other", "piano", "vocals")),
    *(_stem("mdx", n) for n in ("instrumental", "other", "vocals")),
    ArtifactSpec(field="sonification", filename="sonification.mp3"),
)
