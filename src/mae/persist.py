from __future__ import annotations

import contextlib
import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Mapping, Optional

from mae.catalog import ARTIFACTS, ERROR_FILENAME, KIND_JSON, ArtifactSpec
from mae.data_url import decode_base64, preview, strip_data_url
from mae.errors import FieldDecodeError

log = logging.getLogger(__name__)

WRITTEN = "written"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass(frozen=True)
class ArtifactResult:
    field: str
    path: Path
    status: str
    detail: str = ""


@dataclass
class PersistReport:
    output_dir: Path
    results: List[ArtifactResult] = field(default_factory=list)

    def _with(self, status: str) -> List[ArtifactResult]:
        return [r for r in self.results if r.status == status]

    @property
    def written(self) -> List[ArtifactResult]:
        return self._with(WRITTEN)

    @property
    def skipped(self) -> List[ArtifactResult]:
        return self._with(SKIPPED)

    @property
    def failed(self) -> List[ArtifactResult]:
        return self._with(FAILED)


@contextlib.contextmanager
def _removed_on_failure(path: Path, logger: logging.Logger) -> Iterator[Path]:
    """Delete whatever ended up at ``path`` if the body raises."""
    try:
        yield path
    except BaseException:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.debug("Could not remove partial file %s: %s", path, e)
        raise


def _write_error_file(path: Path, payload: str, logger: logging.Logger) -> None:
    try:
        text = decode_base64(payload).decode("utf-8", errors="replace")
        body = f"Attempted to decode this as JSON (from base64):\n\n{text}"
    except ValueError:
        body = (
            "Could not even base64 decode this for the error file. "
            f"Original base64 (after prefix strip):\n\n{payload}"
        )
    try:
        path.write_text(body, encoding="utf-8")
    except OSError as e:
        logger.error("Could not write diagnostic file %s: %s", path, e)
        return
    logger.error("Saved problematic decoded content (or base64) to %s", path)


def _save_json(spec: ArtifactSpec, payload: str, out_dir: Path, logger: logging.Logger) -> ArtifactResult:
    dest = out_dir / spec.filename
    try:
        with _removed_on_failure(dest, logger):
            try:
                text = decode_base64(payload).decode("utf-8")
                obj = json.loads(text)
            except ValueError as e:
                raise FieldDecodeError(spec.field, str(e)) from e
            dest.write_text(json.dumps(obj, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except (FieldDecodeError, OSError) as e:
        logger.error("Error processing %s for %s: %s", spec.field, spec.filename, e)
        logger.error("Problematic base64 for JSON (first 50 chars): %s", preview(payload))
        err_path = out_dir / ERROR_FILENAME
        _write_error_file(err_path, payload, logger)
        return ArtifactResult(spec.field, err_path, FAILED, str(e))

    logger.info("Successfully saved %s to %s", spec.filename, dest)
    return ArtifactResult(spec.field, dest, WRITTEN)


def _save_binary(spec: ArtifactSpec, payload: str, out_dir: Path, logger: logging.Logger) -> ArtifactResult:
    dest = out_dir / spec.filename
    try:
        with _removed_on_failure(dest, logger):
            try:
                data = decode_base64(payload)
            except ValueError as e:
                raise FieldDecodeError(spec.field, str(e)) from e
            dest.write_bytes(data)
    except (FieldDecodeError, OSError) as e:
        logger.error("Error decoding/saving %s (path: %s): %s", spec.filename, dest, e)
        logger.error("Problematic base64 data (first 50 chars): %s", preview(payload))
        return ArtifactResult(spec.field, dest, FAILED, str(e))

    logger.info("Successfully saved %s to %s", spec.filename, dest)
    return ArtifactResult(spec.field, dest, WRITTEN)


def persist_field(
    spec: ArtifactSpec,
    value: Optional[str],
    out_dir: Path,
    logger: Optional[logging.Logger] = None,
) -> ArtifactResult:
    """
    Decode one catalog field and write it under ``out_dir``.

    Never raises for bad data: the outcome is reported in the result.
    """
    logger = logger or log
    dest = out_dir / spec.filename

    if not value:
        logger.warning("%s not found in output or is empty.", spec.field)
        return ArtifactResult(spec.field, dest, SKIPPED, "missing")

    payload = strip_data_url(value, logger=logger)
    if not payload or not payload.strip():
        logger.warning(
            "Skipping %s: base64 data is empty or undefined after stripping prefix.", spec.filename
        )
        return ArtifactResult(spec.field, dest, SKIPPED, "empty")

    if spec.kind == KIND_JSON:
        return _save_json(spec, payload, out_dir, logger)
    return _save_binary(spec, payload, out_dir, logger)


def persist(
    output: Mapping[str, Optional[str]],
    output_dir: Path,
    *,
    workers: int = 1,
    logger: Optional[logging.Logger] = None,
) -> PersistReport:
    """
    Write every catalog artifact found in ``output`` to ``output_dir``.

    Fields are independent; a corrupt or missing one never stops the rest.
    With ``workers > 1`` fields are decoded and written on a thread pool.
    Results are always reported in catalog order.
    """
    logger = logger or log
    out_dir = Path(output_dir)
    report = PersistReport(output_dir=out_dir)

    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Could not create output directory %s: %s", out_dir, e)
        report.results = [
            ArtifactResult(a.field, out_dir / a.filename, FAILED, f"output dir: {e}") for a in ARTIFACTS
        ]
        return report
    logger.info("Ensured output directory exists: %s", out_dir)

    def one(spec: ArtifactSpec) -> ArtifactResult:
        try:
            return persist_field(spec, output.get(spec.field), out_dir, logger)
        except Exception as e:
            logger.exception("Unexpected error while processing %s", spec.field)
            return ArtifactResult(spec.field, out_dir / spec.filename, FAILED, str(e))

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            report.results = list(executor.map(one, ARTIFACTS))
    else:
        report.results = [one(a) for a in ARTIFACTS]

    logger.info(
        "Finished processing all output fields: %d written, %d skipped, %d failed",
        len(report.written),
        len(report.skipped),
        len(report.failed),
    )
    return report
