"""RainViewer public weather-maps feed client."""

import logging

from skycast.config.schema import IngestConfig
from skycast.ingest.http_retry import get_json
from skycast.models.radar import RadarFrame

logger = logging.getLogger(__name__)


class RainViewerClient:
    def __init__(self, config: IngestConfig | None = None):
        self.config = config or IngestConfig()

    def get_frames(self) -> tuple[list[RadarFrame], list[RadarFrame]]:
        """Fetch radar snapshots as ``(past, nowcast)``, each in feed order."""
        raw = get_json(
            self.config.radar_feed_url,
            headers={"User-Agent": self.config.user_agent},
            timeout=self.config.timeout_seconds,
            max_retries=self.config.max_retries,
            retry_base_delay=self.config.retry_base_delay_seconds,
        )
        radar = raw.get("radar", {}) if isinstance(raw, dict) else {}
        past = _parse_frames(radar.get("past") or [])
        nowcast = _parse_frames(radar.get("nowcast") or [])
        logger.debug("Radar feed: %d past, %d nowcast frames", len(past), len(nowcast))
        return past, nowcast


def _parse_frames(items: list[dict]) -> list[RadarFrame]:
    return [RadarFrame(time=int(item["time"]), path=str(item["path"])) for item in items]
