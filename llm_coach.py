"""
AI coach backed by Claude
Builds the coaching prompt from recent logs (and optional research) and
falls back to a fixed reply whenever the API can't be used
"""

from datetime import datetime
from typing import Dict, List, Any, Optional

from anthropic import Anthropic

from coach_responder import generate_fallback_chat_response

SYSTEM_PROMPT_TEMPLATE = """You are an elite AI fitness coach with deep expertise in evidence-based training, nutrition, and recovery. You combine the analytical rigor of a sports scientist with the motivational energy of a world-class trainer.

## Core Principles:
- **Science-First**: Base recommendations on peer-reviewed research
- **Individual Context**: Consider the user's training history and current state
- **Motivational Tone**: Be direct, encouraging, and goal-oriented
- **Practical Application**: Give specific, actionable guidance

## Current Training Context:
Recent training logs:
```
{logs_summary}
```
{research_section}
## Response Format:
- Use **bold** for key concepts and recommendations
- Use `code` for specific metrics, rep ranges, percentages
- Use bullet points and numbered lists for clarity
- Always give the reasoning behind recommendations

## Key Areas of Expertise:
- Progressive overload and periodization
- Recovery optimization (sleep, nutrition, stress)
- Body composition changes during cuts/bulks
- DOMS interpretation and training adjustments
- Exercise selection and injury prevention"""


def build_system_prompt(logs: List[Dict[str, Any]], search_results: Optional[str] = None) -> str:
    """System prompt with the 10 most recent logs and any research findings"""
    lines = []
    for log in logs[:10]:
        timestamp = log.get('timestamp')
        date_str = timestamp.strftime('%Y-%m-%d') if isinstance(timestamp, datetime) else str(timestamp)[:10]
        lines.append(f"{date_str}: {log.get('content', '')}")
    logs_summary = '\n'.join(lines) if lines else 'No logs yet.'

    research_section = f"\n## Latest Research Context:\n{search_results}\n" if search_results else ''

    return SYSTEM_PROMPT_TEMPLATE.format(
        logs_summary=logs_summary,
        research_section=research_section
    )


def format_messages(history: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Last 10 chat messages as Claude messages (must start with a user turn)"""
    messages = []
    for msg in history[-10:]:
        content = msg.get('content') if isinstance(msg, dict) else None
        if not isinstance(content, str) or not content.strip():
            continue
        content = content.strip()
        messages.append({
            'role': 'user' if msg.get('isUser') else 'assistant',
            'content': content
        })

    while messages and messages[0]['role'] != 'user':
        messages.pop(0)
    return messages


class CoachLLM:
    """Thin wrapper over the Anthropic Messages API"""

    def __init__(self, api_key: Optional[str] = None, model: str = "claude-3-haiku-20240307",
                 temperature: float = 0.7, max_tokens: int = 1000):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.client = Anthropic(api_key=api_key) if api_key else None

    def is_available(self) -> bool:
        return self.client is not None

    def generate_response(self, history: List[Dict[str, Any]], logs: List[Dict[str, Any]],
                          search_results: Optional[str] = None) -> Dict[str, Any]:
        """
        Ask Claude for a coaching reply.

        Returns {'response', 'fallback', 'usage'} - fallback is True when the
        fixed reply was used instead of the model.
        """
        messages = format_messages(history)
        if not self.client or not messages:
            return {'response': generate_fallback_chat_response(), 'fallback': True, 'usage': None}

        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=build_system_prompt(logs, search_results),
                messages=messages
            )
            response_text = message.content[0].text if message.content else ''
            if not response_text:
                response_text = 'I apologize, but I encountered an error processing your request.'
            return {
                'response': response_text,
                'fallback': False,
                'usage': {
                    'input_tokens': message.usage.input_tokens,
                    'output_tokens': message.usage.output_tokens
                }
            }
        except Exception as e:
            print(f"Error getting AI coach response: {e}")
            return {'response': generate_fallback_chat_response(), 'fallback': True, 'usage': None}
