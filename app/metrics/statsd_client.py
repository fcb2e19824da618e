import logging
from typing import Dict, Optional

from app.constants.metrics import Constants

logger = logging.getLogger("metrics")


class StatsdClient:
    def __init__(self, prefix: str = Constants.Metric.PREFIX):
        self.prefix = prefix
        logger.info(f"Initialized StatsdClient with prefix: {prefix}")

    def timing(
        self,
        metric: str,
        value_ms: float,
        sample_rate: float = Constants.Metric.HUNDRED_SAMPLING_RATE,
        tags: Optional[Dict[str, str]] = None,
    ):
        formatted_metric = f"{self.prefix}.{self._sanitize_metric(metric)}"
        tag_str = self._format_tags(tags) if tags else ""
        logger.info(f"STATSD TIMING: {formatted_metric}{tag_str} {value_ms:.2f}ms @{sample_rate}")

    def increment(
        self,
        metric: str,
        value: int = Constants.Metric.INCREMENT_COUNT,
        sample_rate: float = Constants.Metric.HUNDRED_SAMPLING_RATE,
        tags: Optional[Dict[str, str]] = None,
    ):
        formatted_metric = f"{self.prefix}.{self._sanitize_metric(metric)}"
        tag_str = self._format_tags(tags) if tags else ""
        logger.info(f"STATSD COUNT: {formatted_metric}{tag_str} +{value} @{sample_rate}")

    def _sanitize_metric(self, metric: str) -> str:
        return metric.replace("/", ".").replace("-", "_").replace(" ", "_")

    def _format_tags(self, tags: Dict[str, str]) -> str:
        if not tags:
            return ""
        return "," + ",".join(f"{k}:{v}" for k, v in tags.items())


# Create a singleton instance
statsd = StatsdClient()
