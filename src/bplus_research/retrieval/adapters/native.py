from typing import List
from ...schemas.providers import ProviderSpec

# Public JSON APIs that make up the built-in native search.
# Wikipedia's search list has no URL field, so the page id goes through ?curid=.
NATIVE_PROVIDERS = [
    ProviderSpec(
        name="wikipedia",
        url_template="https://en.wikipedia.org/w/api.php?action=query&list=search&utf8=1&format=json&srlimit=10&srsearch={query}",
        results_path="query.search",
        title_path="title",
        url_path="pageid",
        url_prefix="https://en.wikipedia.org/?curid=",
        content_path="snippet",
    ),
    ProviderSpec(
        name="reddit",
        url_template="https://www.reddit.com/search.json?sort=relevance&t=all&limit=10&q={query}",
        results_path="data.children",
        title_path="data.title",
        url_path="data.permalink",
        url_prefix="https://www.reddit.com",
        content_path="data.selftext",
    ),
    ProviderSpec(
        name="stackexchange",
        url_template="https://api.stackexchange.com/2.3/search/advanced?order=desc&sort=relevance&accepted=True&answers=1&site=stackoverflow&filter=default&q={query}",
        results_path="items",
        title_path="title",
        url_path="link",
    ),
]


def native_specs() -> List[ProviderSpec]:
    return list(NATIVE_PROVIDERS)
