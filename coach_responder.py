#!/usr/bin/env python3
"""
Rule-based coaching responses
Used right after a log is saved, and whenever the AI coach can't be reached
"""

from typing import Dict, Any, Optional

GENERIC_ACKNOWLEDGMENT = "📝 Log recorded! I'll analyze this with your historical data to provide better coaching."

FALLBACK_CHAT_RESPONSE = (
    "I couldn't reach the AI coach right now. Keep logging your DOMS, sleep and "
    "bodyweight and I'll factor them in as soon as I'm back online."
)


def _format_value(value) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def generate_log_response(structured: Optional[Dict[str, Any]]) -> str:
    """
    Build the "Log Analysis" message for a structured log.
    Pure function: the same input always produces the same string.
    """
    if not structured:
        return GENERIC_ACKNOWLEDGMENT

    doms = structured.get('doms')
    weight = structured.get('weight')
    waist = structured.get('waist')
    body_fat = structured.get('bodyFat')
    sleep = structured.get('sleep')

    if all(v is None for v in (doms, weight, waist, body_fat, sleep)):
        return GENERIC_ACKNOWLEDGMENT

    response = "📊 **Log Analysis**\n\n"

    if doms is not None:
        if doms <= 2:
            response += "✅ Low DOMS - good recovery, ready for intensity\n"
        elif doms <= 4:
            response += "⚠️ Moderate DOMS - consider lighter training\n"
        else:
            response += "🔴 High DOMS - prioritize recovery today\n"

    if weight is not None:
        response += f"⚖️ Weight: `{_format_value(weight)}kg` logged\n"
    if waist is not None:
        response += f"📏 Waist: `{_format_value(waist)}cm` recorded\n"
    if body_fat is not None:
        response += f"📊 Body Fat: `{_format_value(body_fat)}%` tracked\n"
    if sleep is not None:
        verdict = 'Good!' if sleep >= 7 else 'Could be better'
        response += f"😴 Sleep: `{_format_value(sleep)}h` - {verdict}\n"

    response += "\n💡 Keep tracking consistently for better insights!"
    return response


def generate_fallback_chat_response() -> str:
    """Fixed reply for the chat when the language model is unavailable"""
    return FALLBACK_CHAT_RESPONSE
