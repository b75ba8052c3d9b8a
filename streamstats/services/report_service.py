import math
from typing import List

from streamstats.schemas.video_stats import StatsReport


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def render_report(report: StatsReport) -> List[str]:
    lines = [
        "=== AGGREGATING VIDEO STATISTICS ===",
        "",
        "Step 1: Building video_stats from events...",
        f"  Created {report.created} video stats entries",
        "",
        "Step 2: Creating indexes...",
        "  Indexes created",
        "",
        f"Step 3: Top {report.top_n} videos by views:",
    ]
    for stats in report.top_videos:
        lines.append(
            f"  - {stats.video_id}: {stats.total_views} views, avg {round_half_up(stats.avg_duration)}s"
        )

    lines += ["", "Step 4: Category breakdown:"]
    for row in report.categories:
        lines.append(f"  - {row.category}: {row.count} videos, {row.total_views} views")

    lines += ["", "=== AGGREGATION COMPLETE ==="]
    return lines
