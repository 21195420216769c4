#!/usr/bin/env python3
"""
Tests for the free-text log parser
"""

import pytest

from log_parser import (
    build_structured_log,
    extract_structured_fields,
    get_metric_value,
    normalize_log_type,
    parse_natural_language_log,
    validate_metrics,
)


def test_quick_log_example():
    structured = extract_structured_fields("DOMS 3, 71.4kg, 6.5h sleep, sore triceps")
    assert structured == {'doms': 3, 'weight': 71.4, 'sleep': 6.5}


@pytest.mark.parametrize("content", [
    "doms 7",
    "legs wrecked, doms 7 today",
    "Felt ok. doms 7, 8h sleep",
])
def test_doms_value(content):
    assert extract_structured_fields(content)['doms'] == 7


def test_doms_with_colon_and_case():
    assert extract_structured_fields("DOMS: 4")['doms'] == 4


def test_no_recognized_keyword_returns_none():
    assert extract_structured_fields("easy jog around the park") is None
    assert extract_structured_fields("") is None


def test_waist_and_bf_short_form():
    structured = extract_structured_fields("waist: 81.5, bf 14")
    assert structured == {'waist': 81.5, 'bodyFat': 14.0}


def test_sleep_keyword_first_form():
    assert extract_structured_fields("sleep: 7.5, felt great")['sleep'] == 7.5


def test_sleep_number_first_form_preferred():
    assert extract_structured_fields("8 sleep")['sleep'] == 8.0
    assert extract_structured_fields("slept badly, 5.5h sleep")['sleep'] == 5.5


def test_body_fat_forms():
    assert extract_structured_fields("12% body fat")['bodyFat'] == 12.0
    assert extract_structured_fields("13.5% fat")['bodyFat'] == 13.5
    assert extract_structured_fields("Body fat 12%, great progress")['bodyFat'] == 12.0


def test_fields_do_not_cross_contaminate():
    structured = extract_structured_fields("71.4kg")
    assert structured == {'weight': 71.4}

    structured = extract_structured_fields("waist 80, 72kg")
    assert structured == {'weight': 72.0, 'waist': 80.0}


def test_first_match_wins():
    assert extract_structured_fields("doms 2 then doms 6")['doms'] == 2


def test_parse_natural_language_log_fills_structured():
    log = parse_natural_language_log({'type': 'recovery', 'content': 'DOMS 5'})
    assert log['structured'] == {'doms': 5}


def test_parse_natural_language_log_keeps_declared_structured():
    original = {'type': 'metrics', 'content': 'DOMS 5', 'structured': {'doms': 2}}
    assert parse_natural_language_log(original) is original


def test_parse_natural_language_log_without_match():
    log = parse_natural_language_log({'type': 'workout', 'content': 'bench press'})
    assert log['structured'] is None


def test_build_structured_log_content_line():
    log = build_structured_log({
        'type': 'recovery',
        'doms': 3,
        'weight': '71.4',
        'waist': '80',
        'bodyFat': '',
        'sleep': 7,
        'notes': 'felt good',
    })
    assert log['type'] == 'recovery'
    assert log['content'] == "DOMS: 3/10, Weight: 71.4kg, Waist: 80cm, Sleep: 7h, Notes: felt good"
    assert log['structured'] == {
        'doms': 3, 'weight': 71.4, 'waist': 80.0, 'sleep': 7.0, 'notes': 'felt good'
    }


def test_build_structured_log_defaults():
    log = build_structured_log({})
    assert log == {'type': 'metrics', 'content': 'DOMS: 3/10', 'structured': {'doms': 3}}


def test_structured_content_parses_back():
    log = build_structured_log({'doms': 6, 'weight': 80, 'sleep': 6})
    parsed = extract_structured_fields(log['content'])
    assert parsed['doms'] == 6
    assert parsed['weight'] == 80.0
    assert parsed['sleep'] == 6.0


def test_normalize_log_type():
    assert normalize_log_type(None) == 'recovery'
    assert normalize_log_type(' Workout ') == 'workout'
    with pytest.raises(ValueError):
        normalize_log_type('yoga')
    with pytest.raises(ValueError):
        normalize_log_type(5)


def test_validate_metrics():
    assert validate_metrics({'doms': 4, 'weight': 71.4, 'notes': 'ok'}) == {'doms': 4, 'weight': 71.4, 'notes': 'ok'}

    for structured in ({'doms': 'high'}, {'doms': 0}, {'doms': 11}, {'sleep': True}, {'waist': float('nan')}):
        with pytest.raises(ValueError):
            validate_metrics(structured)


def test_build_structured_log_rejects_bad_doms():
    with pytest.raises(ValueError):
        build_structured_log({'doms': 15})
    with pytest.raises(ValueError):
        build_structured_log({'doms': True})


def test_get_metric_value_nested():
    structured = {
        'bodyMeasurements': {'weight': 70.2, 'bodyFat': 11},
        'recovery': {'doms': 4, 'hrv': 55},
    }
    assert get_metric_value(structured, 'weight') == 70.2
    assert get_metric_value(structured, 'bodyFat') == 11
    assert get_metric_value(structured, 'doms') == 4
    assert get_metric_value(structured, 'sleep') is None
    assert get_metric_value(None, 'weight') is None


def test_get_metric_value_prefers_top_level():
    structured = {'weight': 71, 'bodyMeasurements': {'weight': 90}}
    assert get_metric_value(structured, 'weight') == 71
