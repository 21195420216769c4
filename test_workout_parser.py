#!/usr/bin/env python3
"""
Tests for exercise line parsing
"""

from log_parser import parse_natural_language_log
from workout_parser import parse_exercise_line, parse_strength_training, summarize_strength_training


def test_weighted_line():
    parsed = parse_exercise_line("dumbbell shoulder press - 75 * 6, 5, 4")
    assert parsed['name'] == "dumbbell shoulder press"
    assert parsed['sets'] == [
        {'reps': 6, 'weight': 75},
        {'reps': 5, 'weight': 75},
        {'reps': 4, 'weight': 75},
    ]


def test_weight_changes():
    parsed = parse_exercise_line("bicep curl - 55 * 7, 60 * 4, 2; 55 * 1")
    assert parsed['sets'] == [
        {'reps': 7, 'weight': 55},
        {'reps': 4, 'weight': 60},
        {'reps': 2, 'weight': 60},
        {'reps': 1, 'weight': 55},
    ]


def test_weight_with_note():
    parsed = parse_exercise_line("one leg calf raises - 75 (1 dumbbell) * 10, 10, 10")
    assert parsed['name'] == "one leg calf raises"
    assert [s['weight'] for s in parsed['sets']] == [75, 75, 75]


def test_bodyweight_reps_only():
    parsed = parse_exercise_line("pull-up 10, 8, 9, 7")
    assert parsed['name'] == "pull-up"
    assert [s['reps'] for s in parsed['sets']] == [10, 8, 9, 7]
    assert all(s['weight'] == 0 for s in parsed['sets'])


def test_non_exercise_lines():
    assert parse_exercise_line("") is None
    assert parse_exercise_line("run 5") is None
    assert parse_exercise_line("doms 4") is None
    assert parse_exercise_line("felt strong today") is None
    assert parse_exercise_line("squat - heavy") is None


def test_parse_strength_training():
    text = "Push day\nbench press - 100 * 5, 5, 5\npushup 30, 25\nfelt good"
    strength = parse_strength_training(text, title="Push day")
    assert strength['title'] == "Push day"
    assert [e['name'] for e in strength['exercises']] == ["bench press", "pushup"]

    assert summarize_strength_training(strength) == {
        'exercise_count': 2,
        'total_sets': 5,
        'total_volume': 1500,
    }

    assert parse_strength_training("rest day") is None


def test_workout_log_gets_strength_training():
    log = parse_natural_language_log({
        'type': 'workout',
        'content': "squat - 120 * 5, 5\ndoms 2",
    })
    assert log['structured']['doms'] == 2
    assert log['structured']['strengthTraining']['exercises'][0]['name'] == "squat"


def test_recovery_log_skips_exercise_parsing():
    log = parse_natural_language_log({'type': 'recovery', 'content': "pushup 30, 25"})
    assert log['structured'] is None
