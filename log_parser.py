#!/usr/bin/env python3
"""
Flexible Log Parser
Parses free-text fitness logs to extract DOMS, bodyweight, waist, sleep and body fat
"""

import math
import re
from typing import Dict, Any, Optional

from workout_parser import parse_strength_training

LOG_TYPES = ('workout', 'nutrition', 'recovery', 'metrics', 'strength')
TRAINING_TYPES = ('workout', 'strength')

NUMBER = r'(\d+(?:\.\d+)?)'

# Each pattern is anchored to its own keyword or unit so that numbers
# belonging to another field are never picked up
DOMS_PATTERN = re.compile(r'doms[:\s]*(\d+)', re.IGNORECASE)
WEIGHT_PATTERN = re.compile(NUMBER + r'\s*kg', re.IGNORECASE)
WAIST_PATTERN = re.compile(r'waist[:\s]*' + NUMBER, re.IGNORECASE)
SLEEP_PATTERN = re.compile(
    NUMBER + r'\s*h?\s*sleep|sleep[:\s]*' + NUMBER,
    re.IGNORECASE
)
BODY_FAT_PATTERN = re.compile(
    NUMBER + r'%?\s*(?:body\s*)?fat|bf[:\s]*' + NUMBER + r'|body\s*fat[:\s]*' + NUMBER,
    re.IGNORECASE
)

# Where each metric lives inside the nested sub-records
NESTED_METRICS = {
    'weight': 'bodyMeasurements',
    'bodyFat': 'bodyMeasurements',
    'waist': 'bodyMeasurements',
    'doms': 'recovery',
}

METRICS = ('doms', 'weight', 'waist', 'bodyFat', 'sleep')


def _first_group(match) -> Optional[str]:
    """Return the first non-empty group of a match with alternatives"""
    for group in match.groups():
        if group is not None:
            return group
    return None


def extract_structured_fields(content: str) -> Optional[Dict[str, Any]]:
    """
    Extract structured fields from a free-text log

    Formats supported:
    - "DOMS 3", "doms: 7"
    - "71.4kg", "71 kg"
    - "waist 80", "Waist: 80.5cm"
    - "6.5h sleep", "8 sleep", "sleep: 7"
    - "12% body fat", "12 fat", "bf: 12", "body fat 12%"

    Returns None (not an empty dict) when nothing was recognized.
    """
    if not content:
        return None

    structured = {}

    doms_match = DOMS_PATTERN.search(content)
    if doms_match:
        structured['doms'] = int(doms_match.group(1))

    weight_match = WEIGHT_PATTERN.search(content)
    if weight_match:
        structured['weight'] = float(weight_match.group(1))

    waist_match = WAIST_PATTERN.search(content)
    if waist_match:
        structured['waist'] = float(waist_match.group(1))

    sleep_match = SLEEP_PATTERN.search(content)
    if sleep_match:
        structured['sleep'] = float(_first_group(sleep_match))

    bf_match = BODY_FAT_PATTERN.search(content)
    if bf_match:
        structured['bodyFat'] = float(_first_group(bf_match))

    return structured or None


def parse_natural_language_log(log: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fill in structured data for a log that was submitted as free text.
    Logs that already carry structured data are returned unchanged.
    Workout and strength logs also get their exercise lines parsed.
    """
    if log.get('structured'):
        return log

    content = log.get('content', '')
    structured = extract_structured_fields(content)

    if log.get('type') in TRAINING_TYPES:
        strength = parse_strength_training(content)
        if strength:
            structured = dict(structured or {})
            structured['strengthTraining'] = strength

    enhanced = dict(log)
    enhanced['structured'] = structured
    return enhanced


def normalize_log_type(log_type: Optional[str], default: str = 'recovery') -> str:
    """Validate a log type, falling back to the default when missing"""
    if not log_type:
        return default
    if not isinstance(log_type, str):
        raise ValueError(f"Log type must be a string, got {log_type!r}")
    log_type = log_type.strip().lower()
    if log_type not in LOG_TYPES:
        raise ValueError(f"Unknown log type '{log_type}' (expected one of: {', '.join(LOG_TYPES)})")
    return log_type


def validate_metrics(structured: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check the known metrics of a structured record: each must be a number
    (not a bool) and DOMS must be on the 1-10 scale. Raises ValueError.
    """
    for metric in METRICS:
        value = structured.get(metric)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise ValueError(f"{metric} must be a number, got {value!r}")

    doms = structured.get('doms')
    if doms is not None and not 1 <= doms <= 10:
        raise ValueError(f"doms must be between 1 and 10, got {doms}")
    return structured


def _to_float(value) -> Optional[float]:
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise ValueError(f"Expected a number, got {value!r}")
    return float(value)


def _format_number(value: float) -> str:
    """Render 71.0 as "71" and 71.4 as "71.4" """
    return f"{value:g}"


def build_structured_log(form: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build a log from the structured entry form.

    The content line mirrors what the user would have typed, e.g.
    "DOMS: 3/10, Weight: 71.4kg, Sleep: 7h, Notes: felt good"
    """
    doms = form.get('doms')
    if isinstance(doms, bool):
        raise ValueError("doms must be a number")
    doms = 3 if doms is None or doms == '' else int(doms)
    weight = _to_float(form.get('weight'))
    waist = _to_float(form.get('waist'))
    body_fat = _to_float(form.get('bodyFat'))
    sleep = _to_float(form.get('sleep'))
    notes = str(form.get('notes') or '').strip()

    structured = {'doms': doms}
    content = f"DOMS: {doms}/10"
    if weight is not None:
        structured['weight'] = weight
        content += f", Weight: {_format_number(weight)}kg"
    if waist is not None:
        structured['waist'] = waist
        content += f", Waist: {_format_number(waist)}cm"
    if body_fat is not None:
        structured['bodyFat'] = body_fat
        content += f", Body Fat: {_format_number(body_fat)}%"
    if sleep is not None:
        structured['sleep'] = sleep
        content += f", Sleep: {_format_number(sleep)}h"
    if notes:
        structured['notes'] = notes
        content += f", Notes: {notes}"

    validate_metrics(structured)
    return {
        'type': normalize_log_type(form.get('type'), default='metrics'),
        'content': content,
        'structured': structured,
    }


def get_metric_value(structured: Optional[Dict[str, Any]], metric: str) -> Optional[float]:
    """
    Read a metric from structured data - legacy top-level fields first,
    then the nested sub-record it belongs to
    """
    if not structured:
        return None

    value = structured.get(metric)
    if value is not None:
        return value

    section = NESTED_METRICS.get(metric)
    if section and isinstance(structured.get(section), dict):
        return structured[section].get(metric)
    return None


if __name__ == '__main__':
    test_lines = [
        "DOMS 3, 71.4kg, 6.5h sleep, sore triceps",
        "waist: 81.5, bf 14",
        "Body fat 12%, great progress",
        "sleep 8, felt great",
        "easy run, nothing to report",
    ]

    print("Testing parser:")
    for line in test_lines:
        print(f"\n{line}")
        print(f"  Structured: {extract_structured_fields(line)}")
