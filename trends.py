#!/usr/bin/env python3
"""
Trends and periodic summaries over the logs held in memory
"""

from datetime import datetime, timedelta
from typing import Dict, List, Any, Optional

from log_parser import DOMS_PATTERN, METRICS, get_metric_value

TIMEFRAME_DAYS = {
    'week': 7,
    'month': 30,
}


def get_metric_trend(memory, metric: str, days: int = 7, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """
    Values of one metric over the trailing `days` days, oldest first.
    Logs that don't carry the metric are skipped.
    """
    if metric not in METRICS:
        raise ValueError(f"Unknown metric '{metric}' (expected one of: {', '.join(METRICS)})")

    end_date = now or datetime.now()
    start_date = end_date - timedelta(days=days)

    points = []
    for log in memory.get_logs_by_date_range(start_date, end_date):
        value = get_metric_value(log.get('structured'), metric)
        if value is not None:
            points.append({'date': log['timestamp'], 'value': value})

    points.sort(key=lambda point: point['date'])
    return points


def calculate_average_doms(logs: List[Dict[str, Any]]) -> float:
    """Average DOMS read back out of the raw log text (0 when no log mentions it)"""
    values = []
    for log in logs:
        match = DOMS_PATTERN.search(log.get('content', ''))
        if match:
            values.append(int(match.group(1)))

    if not values:
        return 0.0
    return sum(values) / len(values)


def get_most_frequent_type(logs: List[Dict[str, Any]]) -> Optional[str]:
    """Most common log type; on a tie the type seen first wins"""
    counts = {}
    for log in logs:
        counts[log['type']] = counts.get(log['type'], 0) + 1

    most_frequent = None
    best_count = 0
    for log_type, count in counts.items():
        if count > best_count:
            most_frequent = log_type
            best_count = count
    return most_frequent


def summarize_period(memory, timeframe: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Summary numbers for the last week or month"""
    if timeframe not in TIMEFRAME_DAYS:
        raise ValueError(f"Unknown timeframe '{timeframe}' (expected week or month)")

    end_date = now or datetime.now()
    start_date = end_date - timedelta(days=TIMEFRAME_DAYS[timeframe])
    logs = memory.get_logs_by_date_range(start_date, end_date)

    return {
        'timeframe': timeframe,
        'total_logs': len(logs),
        'workout_count': sum(1 for log in logs if log['type'] == 'workout'),
        'average_doms': calculate_average_doms(logs),
        'most_frequent_type': get_most_frequent_type(logs),
    }


def generate_summary(memory, timeframe: str, now: Optional[datetime] = None) -> str:
    """Markdown digest of the last week or month"""
    stats = summarize_period(memory, timeframe, now)

    if stats['total_logs'] == 0:
        return (
            "No training data available for this timeframe.\n"
            "- Total logs: `0`\n"
            "- Average DOMS: `0.0/10`"
        )

    return (
        f"**{timeframe.capitalize()} Summary:**\n"
        f"- Total workouts: `{stats['workout_count']}`\n"
        f"- Average DOMS: `{stats['average_doms']:.1f}/10`\n"
        f"- Total logs: `{stats['total_logs']}`\n"
        f"- Most frequent log type: `{stats['most_frequent_type']}`"
    )
