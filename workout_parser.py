#!/usr/bin/env python3
"""
Flexible Workout Parser
Parses strength-training lines into exercises with weight/reps per set
"""

import re
from typing import Dict, List, Any, Optional

# Metric keywords that look like "name reps" lines but aren't exercises
NON_EXERCISE_WORDS = {'doms', 'sleep', 'waist', 'bf', 'body fat', 'weight'}

def parse_exercise_line(line: str) -> Optional[Dict[str, Any]]:
    """
    Parse a single exercise line into an exercise with its sets

    Formats supported:
    - "dumbbell shoulder press - 75 * 6, 5, 4" (weighted)
    - "bicep curl - 55 * 7, 60 * 4, 2; 55 * 1" (weighted with changes)
    - "pull-up - 0 * 15, 8, 8" (bodyweight with weight notation)
    - "pull-up 10, 8, 9, 7" (bodyweight, reps only)
    - "one leg calf raises - 75 (1 dumbbell) * 10, 10, 10"
    """
    line = line.strip()
    if not line or line.startswith('SKIP') or line.lower().startswith('run'):
        return None

    # Bodyweight format first: "exercise reps, reps, reps" (no dash, no asterisk)
    bodyweight_match = re.match(r'^([a-zA-Z\s\-]+?)\s+(\d+(?:\s*,\s*\d+)*)$', line)
    if bodyweight_match:
        name = bodyweight_match.group(1).strip()
        if name.lower() in NON_EXERCISE_WORDS:
            return None
        reps = [int(r.strip()) for r in bodyweight_match.group(2).split(',')]
        return {
            'name': name,
            'sets': [{'reps': r, 'weight': 0} for r in reps]
        }

    # Weighted format: "exercise - weight * reps, reps" with optional weight changes
    if ' - ' not in line:
        return None

    name, weight_reps_part = [part.strip() for part in line.split(' - ', 1)]

    # Handle cases like "75 (1 dumbbell) * 10" - extract just the weight
    weight_match = re.match(r'(\d+(?:\.\d+)?)\s*(?:\([^)]+\))?\s*\*', weight_reps_part)
    if not name or not weight_match:
        return None

    current_weight = float(weight_match.group(1))
    reps_part = weight_reps_part.split('*', 1)[1]

    # Semicolons and commas both separate sets; "60 * 4" switches the weight
    sets = []
    for part in re.split(r'[;,]', reps_part):
        part = part.strip()
        change_match = re.match(r'^(\d+(?:\.\d+)?)\s*\*\s*(\d+)$', part)
        if change_match:
            current_weight = float(change_match.group(1))
            sets.append({'reps': int(change_match.group(2)), 'weight': current_weight})
        elif part.isdigit():
            sets.append({'reps': int(part), 'weight': current_weight})

    if not sets:
        return None

    return {
        'name': name,
        'sets': sets
    }

def parse_strength_training(workout_text: str, title: str = 'Workout', date: str = '') -> Optional[Dict[str, Any]]:
    """
    Parse a full workout entry into a strength-training record.
    Returns None when no line looks like an exercise.
    """
    exercises: List[Dict[str, Any]] = []
    for line in workout_text.split('\n'):
        parsed = parse_exercise_line(line)
        if parsed:
            exercises.append(parsed)

    if not exercises:
        return None

    return {
        'title': title,
        'date': date,
        'exercises': exercises
    }

def summarize_strength_training(strength: Dict[str, Any]) -> Dict[str, Any]:
    """Totals for a strength-training record"""
    exercises = strength.get('exercises', [])
    all_sets = [s for exercise in exercises for s in exercise.get('sets', [])]
    return {
        'exercise_count': len(exercises),
        'total_sets': len(all_sets),
        'total_volume': sum(s['reps'] * s['weight'] for s in all_sets)
    }
