"""
Web search for fitness research
Tavily or SerpAPI (Google Scholar), with a fixed fallback result when
search is not configured or the provider fails
"""

from urllib.parse import urlparse

import requests

SEARCH_TIMEOUT = 15  # seconds

SCIENTIFIC_TERMS = [
    'exercise physiology',
    'sports science',
    'resistance training',
    'peer reviewed',
    'study',
    'research'
]

RESEARCH_DOMAINS = ['pubmed.ncbi.nlm.nih.gov', 'scholar.google.com', 'examine.com']

FALLBACK_RESULT = {
    'title': 'Exercise Research Database - Search not available',
    'url': 'https://pubmed.ncbi.nlm.nih.gov/',
    'snippet': ('Real-time research search is currently unavailable. Please check your search API '
                'configuration. For now, recommendations are based on established exercise science principles.'),
    'publishedDate': '2024'
}

def enhance_query(query):
    """Add exercise-science context unless the query already has it"""
    query_lower = query.lower()
    if any(term in query_lower for term in SCIENTIFIC_TERMS):
        return query
    return f"{query} exercise science research study"

def get_fallback_results():
    return [dict(FALLBACK_RESULT)]

def summarize_research(results):
    """Markdown digest of the top 3 results"""
    if not results:
        return "No recent research found for this query."

    entries = []
    for index, result in enumerate(results[:3], start=1):
        hostname = urlparse(result.get('url', '')).hostname or result.get('url', '')
        entries.append(f"**{index}. {result.get('title', '')}**\n{result.get('snippet', '')}\n*Source: {hostname}*")

    return ("## Latest Research Findings:\n\n" + '\n\n'.join(entries) +
            "\n\n*Note: Always consult with healthcare professionals before making significant changes "
            "to your training or nutrition.*")

class SearchService:
    """Research search against a configured provider"""

    PROVIDERS = ('tavily', 'serpapi')

    def __init__(self, api_key=None, provider='tavily'):
        if provider not in self.PROVIDERS:
            raise ValueError(f"Unsupported search provider: {provider}")
        self.api_key = api_key
        self.provider = provider

    def is_configured(self):
        return bool(self.api_key)

    def search_fitness_research(self, query):
        if not self.api_key:
            print("⚠ Search service not initialized")
            return get_fallback_results()

        try:
            if self.provider == 'tavily':
                return self._search_with_tavily(query)
            return self._search_with_serpapi(query)
        except Exception as e:
            print(f"Search API error: {e}")
            return get_fallback_results()

    def _search_with_tavily(self, query):
        response = requests.post(
            'https://api.tavily.com/search',
            headers={
                'Content-Type': 'application/json',
                'Authorization': f'Bearer {self.api_key}'
            },
            json={
                'query': enhance_query(query),
                'search_depth': 'advanced',
                'include_domains': RESEARCH_DOMAINS,
                'max_results': 5
            },
            timeout=SEARCH_TIMEOUT
        )
        response.raise_for_status()
        data = response.json()

        return [
            {
                'title': result.get('title', ''),
                'url': result.get('url', ''),
                'snippet': result.get('content', ''),
                'publishedDate': result.get('published_date')
            }
            for result in data.get('results') or []
        ]

    def _search_with_serpapi(self, query):
        response = requests.get(
            'https://serpapi.com/search',
            params={
                'engine': 'google_scholar',
                'q': enhance_query(query),
                'api_key': self.api_key,
                'num': '5'
            },
            timeout=SEARCH_TIMEOUT
        )
        response.raise_for_status()
        data = response.json()

        return [
            {
                'title': result.get('title', ''),
                'url': result.get('link', ''),
                'snippet': result.get('snippet', ''),
                'publishedDate': (result.get('publication_info') or {}).get('summary')
            }
            for result in data.get('organic_results') or []
        ]
