"""
mae: music analysis extractor.

Submits one prediction to the music-analysis API and writes the base64
artifacts from its response (analysis JSON, visualization, stems,
sonification) to an output directory.
"""

from __future__ import annotations

__version__ = "0.1.0"
