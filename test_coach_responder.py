#!/usr/bin/env python3
"""
Tests for the rule-based coaching responses
"""

from coach_responder import (
    FALLBACK_CHAT_RESPONSE,
    GENERIC_ACKNOWLEDGMENT,
    generate_fallback_chat_response,
    generate_log_response,
)
from log_parser import extract_structured_fields


def test_quick_log_scenario():
    structured = extract_structured_fields("DOMS 3, 71.4kg, 6.5h sleep, sore triceps")
    response = generate_log_response(structured)

    assert "Moderate DOMS" in response
    assert "71.4kg" in response
    assert "Could be better" in response


def test_doms_bands():
    assert "Low DOMS" in generate_log_response({'doms': 0})
    assert "Low DOMS" in generate_log_response({'doms': 2})
    assert "Moderate DOMS" in generate_log_response({'doms': 4})
    assert "High DOMS" in generate_log_response({'doms': 5})
    assert "High DOMS" in generate_log_response({'doms': 9})


def test_line_order():
    response = generate_log_response({
        'sleep': 8, 'bodyFat': 12.5, 'waist': 80, 'weight': 70, 'doms': 1
    })
    positions = [
        response.index("Low DOMS"),
        response.index("Weight: `70kg`"),
        response.index("Waist: `80cm`"),
        response.index("Body Fat: `12.5%`"),
        response.index("Sleep: `8h` - Good!"),
    ]
    assert positions == sorted(positions)


def test_sleep_threshold():
    assert "Good!" in generate_log_response({'sleep': 7})
    assert "Could be better" in generate_log_response({'sleep': 6.9})


def test_generic_acknowledgment():
    assert generate_log_response(None) == GENERIC_ACKNOWLEDGMENT
    assert generate_log_response({}) == GENERIC_ACKNOWLEDGMENT
    assert generate_log_response({'notes': 'just notes'}) == GENERIC_ACKNOWLEDGMENT


def test_deterministic():
    structured = {'doms': 6, 'weight': 82.3, 'sleep': 5}
    assert generate_log_response(structured) == generate_log_response(dict(structured))


def test_fallback_chat_response():
    assert generate_fallback_chat_response() == FALLBACK_CHAT_RESPONSE
