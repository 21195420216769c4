"""
Per-app service container
One memory store, AI coach and search service per Flask app, passed around
explicitly instead of living in module globals
"""

from config import Settings
from llm_coach import CoachLLM
from memory_service import MemoryService
from search_service import SearchService


class CoachContext:
    def __init__(self, settings, memory, llm, search):
        self.settings = settings
        self.memory = memory
        self.llm = llm
        self.search = search

    @property
    def web_search_enabled(self):
        return self.settings.WEB_SEARCH_ENABLED and self.search.is_configured()


def create_context(settings=None):
    """Build and initialize the services for one app instance"""
    settings = settings or Settings()

    memory = MemoryService()
    memory.initialize()

    llm = CoachLLM(
        api_key=settings.ANTHROPIC_API_KEY,
        model=settings.COACH_MODEL,
        temperature=settings.COACH_TEMPERATURE,
        max_tokens=settings.COACH_MAX_TOKENS
    )
    if not llm.is_available():
        print("⚠ ANTHROPIC_API_KEY not set, AI coach will use fallback responses")

    search = SearchService(api_key=settings.SEARCH_API_KEY, provider=settings.SEARCH_PROVIDER)

    return CoachContext(settings, memory, llm, search)
