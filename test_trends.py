#!/usr/bin/env python3
"""
Tests for metric trends and weekly/monthly summaries
"""

from datetime import datetime, timedelta

import pytest

from memory_service import MemoryService
from trends import (
    calculate_average_doms,
    generate_summary,
    get_metric_trend,
    get_most_frequent_type,
    summarize_period,
)

NOW = datetime(2026, 10, 19, 12, 0, 0)


@pytest.fixture
def memory():
    service = MemoryService()
    service.initialize()
    return service


def add(memory, log_id, content, days_ago, log_type='recovery', structured=None):
    memory.store_log({
        'id': log_id,
        'content': content,
        'type': log_type,
        'timestamp': NOW - timedelta(days=days_ago),
        'structured': structured,
    })


def test_weight_trend_excludes_old_and_missing(memory):
    add(memory, '1', '72kg', 2, structured={'weight': 72.0})
    add(memory, '2', '71.5kg', 5, structured={'weight': 71.5})
    add(memory, '3', 'doms 3', 1, structured={'doms': 3})
    add(memory, '4', '74kg', 9, structured={'weight': 74.0})
    add(memory, '5', 'no structure', 0)

    trend = get_metric_trend(memory, 'weight', 7, now=NOW)
    assert [point['value'] for point in trend] == [71.5, 72.0]
    assert trend[0]['date'] < trend[1]['date']


def test_trend_reads_nested_measurements(memory):
    add(memory, '1', 'scan', 1, log_type='metrics',
        structured={'bodyMeasurements': {'bodyFat': 13.2}})

    trend = get_metric_trend(memory, 'bodyFat', 7, now=NOW)
    assert trend == [{'date': NOW - timedelta(days=1), 'value': 13.2}]


def test_trend_unknown_metric(memory):
    with pytest.raises(ValueError):
        get_metric_trend(memory, 'calories', 7, now=NOW)


def test_empty_week_summary(memory):
    summary = generate_summary(memory, 'week', now=NOW)
    assert "No training data" in summary
    assert "`0`" in summary
    assert "`0.0/10`" in summary

    stats = summarize_period(memory, 'week', now=NOW)
    assert stats['total_logs'] == 0
    assert stats['average_doms'] == 0
    assert stats['most_frequent_type'] is None


def test_week_summary(memory):
    add(memory, '1', 'squats, DOMS: 4', 1, log_type='workout')
    add(memory, '2', 'doms 2, 8h sleep', 2)
    add(memory, '3', 'bench press', 3, log_type='workout')
    add(memory, '4', 'felt fine', 4)
    add(memory, '5', 'doms 9', 20, log_type='workout')

    stats = summarize_period(memory, 'week', now=NOW)
    assert stats['total_logs'] == 4
    assert stats['workout_count'] == 2
    assert stats['average_doms'] == 3.0
    # workout and recovery tie at 2, workout was seen first
    assert stats['most_frequent_type'] == 'workout'

    summary = generate_summary(memory, 'week', now=NOW)
    assert summary.startswith("**Week Summary:**")
    assert "- Total workouts: `2`" in summary
    assert "- Average DOMS: `3.0/10`" in summary
    assert "- Total logs: `4`" in summary
    assert "- Most frequent log type: `workout`" in summary


def test_month_summary_includes_older_logs(memory):
    add(memory, '1', 'doms 9', 20, log_type='workout')
    add(memory, '2', 'doms 3', 40, log_type='workout')

    stats = summarize_period(memory, 'month', now=NOW)
    assert stats['total_logs'] == 1
    assert stats['average_doms'] == 9.0
    assert generate_summary(memory, 'month', now=NOW).startswith("**Month Summary:**")


def test_unknown_timeframe(memory):
    with pytest.raises(ValueError):
        generate_summary(memory, 'year', now=NOW)


def test_average_doms_uses_raw_content():
    logs = [
        {'content': 'DOMS 6', 'structured': {'doms': 1}},
        {'content': 'doms: 2'},
        {'content': 'no soreness mentioned'},
    ]
    assert calculate_average_doms(logs) == 4.0
    assert calculate_average_doms([]) == 0


def test_most_frequent_type():
    logs = [{'type': 'nutrition'}, {'type': 'workout'}, {'type': 'workout'}, {'type': 'nutrition'}]
    assert get_most_frequent_type(logs) == 'nutrition'
    assert get_most_frequent_type(logs + [{'type': 'workout'}]) == 'workout'
    assert get_most_frequent_type([]) is None
