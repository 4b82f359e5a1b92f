from __future__ import annotations

import logging
from typing import Optional

from mae.config import Settings
from mae.errors import MissingOutputError, TransportError
from mae.models import PredictionResponse
from mae.persist import PersistReport, persist
from mae.requester import PredictionClient

log = logging.getLogger(__name__)


def require_output(resp: PredictionResponse) -> None:
    if resp.output is None:
        raise MissingOutputError("No \"output\" data found. Cannot process.")


def run_analysis(
    music_input_url: str,
    settings: Settings,
    *,
    client: Optional[PredictionClient] = None,
    logger: Optional[logging.Logger] = None,
) -> Optional[PersistReport]:
    """
    Request one analysis and persist its artifacts.

    Returns None when nothing could be persisted (request failed, or the
    response had no output bundle). A non-"succeeded" status is advisory:
    whatever output came back is still written.
    """
    logger = logger or log
    if client is None:
        client = PredictionClient(settings.api_url, timeout=settings.timeout, logger=logger)

    try:
        resp = client.submit(music_input_url, visualize=settings.visualize, sonify=settings.sonify)
    except TransportError as e:
        logger.error("Failed to retrieve analysis data: %s", e)
        return None

    try:
        require_output(resp)
    except MissingOutputError as e:
        logger.error("%s", e)
        if resp.error:
            logger.error("API Error was: %s", resp.error)
        return None

    return persist(resp.output, settings.output_dir, workers=settings.workers, logger=logger)
