from datetime import datetime

from streamstats.schemas.video import CategoryBreakdown
from streamstats.schemas.video_stats import StatsReport, VideoStatsRecord
from streamstats.services.report_service import render_report, round_half_up


def _stats(video_id, views, avg):
    return VideoStatsRecord(
        video_id=video_id,
        total_views=views,
        avg_duration=avg,
        unique_viewers=1,
        last_updated=datetime(2024, 1, 1),
    )


def test_round_half_up():
    assert round_half_up(150.5) == 151
    assert round_half_up(2.5) == 3
    assert round_half_up(20.49) == 20
    assert round_half_up(0) == 0


def test_render_report_lines():
    report = StatsReport(
        created=2,
        top_videos=[_stats("video_1", 3, 150.0), _stats("video_2", 1, 980.7)],
        categories=[
            CategoryBreakdown(category="Educational", count=2, total_views=20500),
            CategoryBreakdown(category="Documentary", count=1, total_views=15000),
        ],
    )

    lines = render_report(report)

    assert lines[0] == "=== AGGREGATING VIDEO STATISTICS ==="
    assert "  Created 2 video stats entries" in lines
    assert "  - video_1: 3 views, avg 150s" in lines
    assert "  - video_2: 1 views, avg 981s" in lines
    assert "  - Educational: 2 videos, 20500 views" in lines
    assert lines.index("  - Educational: 2 videos, 20500 views") < lines.index(
        "  - Documentary: 1 videos, 15000 views"
    )
    assert lines[-1] == "=== AGGREGATION COMPLETE ==="


def test_render_report_with_no_data():
    lines = render_report(StatsReport(created=0))

    assert "  Created 0 video stats entries" in lines
    assert "Step 4: Category breakdown:" in lines
    assert not [line for line in lines if line.startswith("  - ")]


def test_render_report_header_uses_requested_top_n():
    report = StatsReport(created=2, top_n=5, top_videos=[_stats("video_1", 3, 150.0), _stats("video_2", 1, 60.0)])

    lines = render_report(report)

    assert "Step 3: Top 5 videos by views:" in lines
