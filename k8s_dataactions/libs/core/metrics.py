"""
Metrics

Prometheus histograms for the discovery phases. The histograms are registered
once, on import, in the default registry.
"""

from prometheus_client import Histogram

from .constants import MetricsConstants

apiserver_call_duration = Histogram(
    MetricsConstants.APISERVER_CALL_DURATION,
    MetricsConstants.APISERVER_CALL_HELP,
    buckets=MetricsConstants.BUCKETS,
)

azure_call_duration = Histogram(
    MetricsConstants.AZURE_CALL_DURATION,
    MetricsConstants.AZURE_CALL_HELP,
    buckets=MetricsConstants.BUCKETS,
)

discover_resources_total_duration = Histogram(
    MetricsConstants.TOTAL_DURATION,
    MetricsConstants.TOTAL_HELP,
    buckets=MetricsConstants.BUCKETS,
)


class PrometheusMetricsRecorder:
    """Records discovery durations into the process-wide Prometheus histograms"""

    def observe_apiserver_call(self, seconds: float) -> None:
        apiserver_call_duration.observe(seconds)

    def observe_cloud_call(self, seconds: float) -> None:
        azure_call_duration.observe(seconds)

    def observe_total(self, seconds: float) -> None:
        discover_resources_total_duration.observe(seconds)


class NoOpMetricsRecorder:
    """Discards every observation"""

    def observe_apiserver_call(self, seconds: float) -> None:
        pass

    def observe_cloud_call(self, seconds: float) -> None:
        pass

    def observe_total(self, seconds: float) -> None:
        pass
