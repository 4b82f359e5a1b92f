from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

import requests

from mae.errors import TransportError
from mae.models import PredictionRequest, PredictionResponse

log = logging.getLogger(__name__)


class PredictionClient:
    """
    HTTP client for the music-analysis prediction endpoint.

    Notes:
      - One POST per call; the server runs the analysis synchronously and
        answers with every artifact inline, so there is no job polling.
      - No retries. A failed request is terminal for the run.
      - Every transport problem surfaces as TransportError.
    """

    def __init__(
        self,
        api_url: str,
        *,
        timeout: Tuple[float, float] = (10.0, 600.0),
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.api_url = (api_url or "").strip()
        self.timeout = timeout
        self.session = session
        self.log = logger or log

    def submit(
        self,
        music_input_url: str,
        visualize: bool = True,
        sonify: bool = True,
    ) -> PredictionResponse:
        req = PredictionRequest(music_input_url=music_input_url, visualize=visualize, sonify=sonify)
        self.log.info("Fetching analysis for: %s", req.music_input_url)

        try:
            post = self.session.post if self.session is not None else requests.post
            r = post(
                self.api_url,
                json=req.to_payload(),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except (requests.exceptions.RequestException, ValueError) as e:
            self.log.error("Error fetching music analysis: %s", e)
            raise TransportError(f"request to {self.api_url} failed: {e}") from e

        if not 200 <= int(r.status_code) < 300:
            body = r.text or ""
            self.log.error("API request failed: %s %s %s", r.status_code, r.reason or "", body)
            raise TransportError(
                f"API returned {r.status_code}",
                status_code=int(r.status_code),
                body=body,
            )

        try:
            obj: Any = r.json()
        except ValueError as e:
            self.log.error("Error fetching music analysis: response is not JSON: %s", e)
            raise TransportError("API returned non-JSON response", status_code=int(r.status_code)) from e

        if not isinstance(obj, dict):
            self.log.error("API returned unexpected JSON shape (expected object): %s", type(obj).__name__)
            raise TransportError("API returned unexpected JSON shape", status_code=int(r.status_code))

        resp = PredictionResponse.from_json(obj)
        self.log.info("Successfully fetched analysis data.")

        if not resp.succeeded:
            self.log.warning("API returned status: %s", resp.status)
            if resp.error:
                self.log.error("API Error: %s", resp.error)

        return resp
