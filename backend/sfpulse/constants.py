"""
Static vocabularies: category queries, place names, sentiment keywords.
"""

# NewsAPI /v2/everything queries, all scoped to San Francisco
NEWSAPI_CATEGORY_QUERIES = {
    "tech": {
        "q": '("San Francisco" OR "Bay Area" OR "SF") AND (AI OR technology OR startup OR "artificial intelligence" OR tech OR "tech company")',
        "domains": "techcrunch.com,theverge.com,sfchronicle.com,sfstandard.com,bloomberg.com,wired.com,sfgate.com",
    },
    "politics": {
        "q": '("San Francisco" OR "Bay Area" OR "SF" OR California) AND (politics OR election OR legislation OR government OR policy OR mayor OR supervisor)',
        "domains": "sfchronicle.com,sfstandard.com,sfgate.com,reuters.com,nytimes.com,politico.com",
    },
    "economy": {
        "q": '("San Francisco" OR "Bay Area" OR "SF") AND (economy OR market OR business OR startup OR "real estate" OR housing OR jobs OR unemployment)',
        "domains": "sfchronicle.com,sfstandard.com,bloomberg.com,wsj.com,sfgate.com,bizjournals.com",
    },
    "sf-local": {
        "q": '"San Francisco" OR "Bay Area" OR SF OR BART OR "Golden Gate" OR Oakland OR Berkeley OR "Silicon Valley"',
        "domains": "sfchronicle.com,sfstandard.com,sfgate.com,mercurynews.com,oaklandside.org",
    },
}

# Google News RSS search queries
RSS_CATEGORY_QUERIES = {
    "tech": '("San Francisco" OR "Bay Area" OR SF) AND (technology OR AI OR startup OR tech)',
    "politics": '("San Francisco" OR "Bay Area" OR California) AND (politics OR election OR government OR mayor)',
    "economy": '("San Francisco" OR "Bay Area" OR SF) AND (economy OR business OR startup OR housing OR "real estate")',
    "sf-local": '"San Francisco" OR "Bay Area" OR SF OR BART OR "Golden Gate" OR Oakland OR Berkeley',
}

# Lowercase substrings; the padded "sf"/"ca" forms avoid matching inside words
SF_PLACE_TOKENS = (
    "san francisco",
    "sf ",
    " sf",
    "bay area",
    "silicon valley",
    "oakland",
    "berkeley",
    "bart",
    "golden gate",
    "soma",
    "mission district",
    "financial district",
    "tenderloin",
    "castro",
    "haight",
    "presidio",
    "marin",
    "peninsula",
    "east bay",
    "south bay",
    "california",
    "ca ",
)

CATEGORY_LABELS = {
    "tech": "San Francisco technology",
    "politics": "San Francisco politics",
    "economy": "San Francisco economy",
    "sf-local": "San Francisco local news",
}

# Query-side keywords for the per-sentiment search
HYPE_KEYWORDS = ("amazing", "love", "excited", "great", "awesome", "fantastic", "incredible")
BACKLASH_KEYWORDS = ("terrible", "hate", "awful", "disappointed", "frustrated", "angry", "worried")

# Client-side classification in the single-fetch mode uses a wider net
HYPE_CLASSIFIER_KEYWORDS = HYPE_KEYWORDS + ("best", "beautiful")
BACKLASH_CLASSIFIER_KEYWORDS = BACKLASH_KEYWORDS + ("worst", "bad")

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
    "be", "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "can", "this", "that", "these", "those",
})

NO_NEWS_SUMMARY = {
    "summary_short": "No news articles available for this category this week.",
    "summary_detailed": "No news articles were found for this category during the specified time period.",
    "bullets": ["No news available"],
    "keywords": ["No Data"],
}
