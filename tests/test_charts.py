"""Tests for the comparison chart figure."""

from decimal import Decimal

from expense_tracker.charts import comparison_figure
from expense_tracker.models.expense import ChartPoint


class TestComparisonFigure:
    """Tests for comparison_figure."""

    def test_axis_keeps_series_order(self):
        """Disjoint periods are drawn in series order, not date order."""
        series = [
            ChartPoint(date_key="2024-03-15", current=Decimal("10")),
            ChartPoint(date_key="2024-02-15", previous=Decimal("5")),
        ]
        fig = comparison_figure(series)

        assert fig.layout.xaxis.type == "category"
        assert list(fig.layout.xaxis.categoryarray) == ["2024-03-15", "2024-02-15"]
        current, previous = fig.data
        assert list(current.x) == ["2024-03-15", "2024-02-15"]
        assert list(current.y) == [10.0, 0.0]
        assert list(previous.y) == [0.0, 5.0]

    def test_trace_names(self):
        fig = comparison_figure([ChartPoint(date_key="2024-03-15")])
        assert [trace.name for trace in fig.data] == ["Current Period", "Previous Period"]
