"""Tests for metric averaging."""
from lighthouse_batch.analyzers import MetricsAccumulator
from lighthouse_batch.models import TRACKED_AUDITS, AuditValue


def _audits(**values):
    audits = {audit_id: AuditValue(numeric_value=0.0) for audit_id in TRACKED_AUDITS}
    for audit_id, value in values.items():
        audits[audit_id.replace("_", "-")] = AuditValue(numeric_value=value)
    return audits


class TestMetricsAccumulator:
    """Test suite for MetricsAccumulator."""

    def test_average_of_two_sites(self):
        """Values 100 and 200 over two sites average to 150."""
        metrics = MetricsAccumulator()
        metrics.record(_audits(first_contentful_paint=100))
        metrics.record(_audits(first_contentful_paint=200))

        averages = metrics.compute_averages(2)

        assert averages["firstContentfulPaint"] == "150.0000000000"
        assert averages["speedIndex"] == "0.0000000000"

    def test_averages_use_given_site_count(self):
        """Sites without recorded metrics still count in the divisor."""
        metrics = MetricsAccumulator()
        metrics.record(_audits(speed_index=300))

        assert metrics.compute_averages(3)["speedIndex"] == "100.0000000000"

    def test_keys_follow_tracked_audits(self):
        metrics = MetricsAccumulator()
        metrics.record(_audits())

        assert list(metrics.compute_averages(1)) == [
            "firstContentfulPaint",
            "largestContentfulPaint",
            "totalBlockingTime",
            "speedIndex",
            "cumulativeLayoutShift",
        ]

    def test_fractional_values_keep_ten_digits(self):
        metrics = MetricsAccumulator()
        metrics.record(_audits(cumulative_layout_shift=0.1))
        metrics.record(_audits(cumulative_layout_shift=0.2))

        assert metrics.compute_averages(2)["cumulativeLayoutShift"] == "0.1500000000"

    def test_missing_values_are_skipped(self):
        metrics = MetricsAccumulator()
        metrics.record({"total-blocking-time": AuditValue(numeric_value=40)})
        metrics.record({"total-blocking-time": AuditValue()})

        averages = metrics.compute_averages(2)

        assert averages["totalBlockingTime"] == "20.0000000000"
        assert averages["firstContentfulPaint"] == "0.0000000000"
        assert len(metrics) == 2

    def test_zero_sites(self):
        averages = MetricsAccumulator().compute_averages(0)
        assert set(averages.values()) == {"0.0000000000"}
