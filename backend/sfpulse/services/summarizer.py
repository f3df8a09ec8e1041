"""
LLM-backed summaries and narrative analysis.

Every structured call validates the model's JSON against a pydantic schema;
a schema miss is raised as ``LLMResponseError`` and retried exactly like a
transport failure. Category summaries additionally degrade to a template
summary built from the articles themselves, which never touches the network.
"""
import asyncio
from typing import Optional, Sequence
from loguru import logger
from pydantic import ValidationError

from sfpulse.config import settings
from sfpulse.constants import CATEGORY_LABELS, NO_NEWS_SUMMARY
from sfpulse.errors import LLMResponseError, UpstreamError, UpstreamUnavailableError, ValidationFailedError
from sfpulse.schemas.chat import ChatMessage, EventChatContext
from sfpulse.schemas.news import Category, CategoryNews, NewsArticle, NewsSummary
from sfpulse.schemas.social import NarrativeAnalysis
from sfpulse.services.llm import ChatCompletionService, llm_service, strip_thinking
from sfpulse.utils.outcome import Outcome, empty, fallback, live
from sfpulse.utils.retry import retry_async

NEWS_ANALYST_SYSTEM_PROMPT = (
    "You are a San Francisco news editor. You write clear, factual weekly "
    "briefings for people who live in the city."
)

CULTURE_ANALYST_SYSTEM_PROMPT = (
    "You are a San Francisco cultural analyst specializing in urban sociology and tech culture. "
    "Provide deep, nuanced analysis that reveals underlying tensions and cultural dynamics."
)

CHATBOT_MAX_RESPONSE_LENGTH = 1000


def build_summary_prompt(category: Category, articles: Sequence[NewsArticle]) -> str:
    label = CATEGORY_LABELS[category]
    listing = "\n\n".join(
        f"{i}. {a.title}\n   Source: {a.source} ({a.published_date})\n   {a.snippet}"
        for i, a in enumerate(articles, start=1)
    )
    return f"""Summarize this week's {label} news from the articles below.

Articles:
{listing}

Return a JSON object with exactly these keys:
- "summaryShort": one paragraph (2-3 sentences) for a news card
- "summaryDetailed": a detailed narrative (2-3 paragraphs) connecting the stories
- "bullets": an array of 5-7 short bullet points with the key developments
- "keywords": an array of 3-5 keywords for the weekly timeline

Only use facts from the articles. Return only the raw JSON object, with no other text."""


def build_narrative_prompt(topic: str, posts_text: str) -> str:
    return f"""You are a San Francisco cultural analyst. I will provide you with a collection of tweets about a specific topic. Your task is to analyze these tweets and return a JSON object with three keys: "hypeSummary", "backlashSummary", and "weeklyPulse".

- "hypeSummary": A 2-3 sentence summary of the positive, supportive, and excited viewpoints.
- "backlashSummary": A 2-3 sentence summary of the negative, critical, and skeptical viewpoints.
- "weeklyPulse": A comprehensive 4-5 sentence analysis of what the debate reveals about SF: the tensions in the city's identity, the values and fears on each side, the connection to ongoing cultural debates, and the questions it leaves open.

Here is the collection of tweets about {topic}:
{posts_text}

Return only the raw JSON object, with no other text."""


def build_fallback_summary(category: Category, articles: Sequence[NewsArticle]) -> NewsSummary:
    """Template summary from titles and snippets; pure string work, cannot fail"""
    label = CATEGORY_LABELS[category]
    top = list(articles)[:5]

    def headline(article: NewsArticle) -> str:
        return article.title.replace(f" - {article.source}", "")

    first_sentences = [(a.snippet.split(".")[0] or a.title) for a in top[:3]]
    landscape = "community" if category == "sf-local" else category

    return NewsSummary(
        summary_short=f"This week in {label}, key developments include: {'. '.join(first_sentences)}.",
        summary_detailed=(
            f"Recent developments in {label} this week highlight several important stories. "
            f"{'. '.join(headline(a) for a in top)}. "
            f"These stories reflect the ongoing dynamics in San Francisco's {landscape} landscape."
        ),
        bullets=[headline(a) for a in top] or ["No news available"],
        keywords=[label, "San Francisco", "Bay Area"],
    )


def no_news_summary() -> NewsSummary:
    return NewsSummary(**NO_NEWS_SUMMARY)


class NarrativeService:
    """Structured LLM generation with retry and graceful degradation"""

    def __init__(
        self,
        llm: Optional[ChatCompletionService] = None,
        max_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None,
        summary_timeout: Optional[float] = None,
    ):
        self.llm = llm or llm_service
        self.max_attempts = max_attempts or settings.LLM_MAX_RETRIES
        self.retry_delay = settings.LLM_RETRY_DELAY if retry_delay is None else retry_delay
        self.summary_timeout = summary_timeout or settings.LLM_SUMMARY_TIMEOUT

    async def summarize(self, category: Category, articles: Sequence[NewsArticle]) -> NewsSummary:
        """
        One attempt at a category summary

        Raises:
            LLMResponseError: JSON missing or not matching ``NewsSummary``
            UpstreamError: Transport or HTTP failure
        """
        data = await self.llm.complete_json(
            [
                {"role": "system", "content": NEWS_ANALYST_SYSTEM_PROMPT},
                {"role": "user", "content": build_summary_prompt(category, articles)},
            ],
            temperature=0.5,
            max_tokens=1500,
        )
        try:
            return NewsSummary.model_validate(data)
        except ValidationError as e:
            raise LLMResponseError(
                "Invalid response format from LLM. Expected summaryShort, summaryDetailed, bullets and keywords fields."
            ) from e

    async def summarize_with_retry(self, category: Category, articles: Sequence[NewsArticle]) -> NewsSummary:
        """Retried ``summarize`` with the summary timeout applied to each attempt"""
        return await retry_async(
            lambda: self._summarize_with_timeout(category, articles),
            max_attempts=self.max_attempts,
            delay=self.retry_delay,
            exceptions=(UpstreamError,),
        )

    async def _summarize_with_timeout(self, category: Category, articles: Sequence[NewsArticle]) -> NewsSummary:
        try:
            return await asyncio.wait_for(self.summarize(category, articles), timeout=self.summary_timeout)
        except asyncio.TimeoutError as e:
            raise UpstreamUnavailableError(
                f"LLM summary for {category} timed out after {self.summary_timeout}s", code="TIMEOUT_ERROR"
            ) from e

    async def generate_category_summary(
        self,
        category: Category,
        articles: Sequence[NewsArticle],
    ) -> Outcome[NewsSummary]:
        """
        Summary for one category that always produces something

        No articles gives the fixed "no news" stub without calling the LLM.
        Otherwise the LLM is tried with retry and a per-call timeout, and a
        template summary is substituted if every attempt fails.
        """
        if not articles:
            return empty(no_news_summary(), reason="no articles")

        logger.info(f"Generating AI summary for {category} with {len(articles)} articles...")
        try:
            summary = await self.summarize_with_retry(category, articles)
        except Exception as e:
            logger.warning(f"Using template summary for {category}: {e}")
            return fallback(build_fallback_summary(category, articles), reason=str(e))

        logger.info(f"AI summary generated for {category}")
        return live(summary)

    async def analyze_narratives(self, topic: str, posts_text: str) -> NarrativeAnalysis:
        """
        One attempt at a hype/backlash/pulse analysis

        Raises:
            ValidationFailedError: No post text to analyze
            LLMResponseError: JSON not matching ``NarrativeAnalysis``
        """
        if not posts_text or not posts_text.strip():
            raise ValidationFailedError("No tweet content provided for analysis")

        data = await self.llm.complete_json(
            [
                {"role": "system", "content": CULTURE_ANALYST_SYSTEM_PROMPT},
                {"role": "user", "content": build_narrative_prompt(topic, posts_text)},
            ],
            temperature=0.7,
            max_tokens=1000,
        )
        try:
            return NarrativeAnalysis.model_validate(data)
        except ValidationError as e:
            raise LLMResponseError(
                "Invalid response format from LLM. Expected hypeSummary, backlashSummary, and weeklyPulse fields."
            ) from e

    async def analyze_narratives_with_retry(self, topic: str, posts_text: str) -> NarrativeAnalysis:
        return await retry_async(
            lambda: self.analyze_narratives(topic, posts_text),
            max_attempts=self.max_attempts,
            delay=self.retry_delay,
            exceptions=(UpstreamError,),
        )

    async def answer_news_question(
        self,
        question: str,
        news: CategoryNews,
        week_of: str,
        history: Sequence[ChatMessage] = (),
    ) -> str:
        """Conversational answer grounded on one category digest"""
        label = CATEGORY_LABELS[news.category]
        bullets = "\n".join(f"{i}. {b}" for i, b in enumerate(news.bullets, start=1))
        sources = "\n".join(f"{i}. {s.title} ({s.source})" for i, s in enumerate(news.sources[:5], start=1))

        context = f"""You are a knowledgeable San Francisco news analyst helping users understand {label} news from the week of {week_of}.

NEWS CONTEXT:
Category: {label}
Week: {week_of}

Summary: {news.summary_short}

Detailed Analysis: {news.summary_detailed}

Key Developments:
{bullets}

Keywords: {', '.join(news.keywords)}

Top Sources:
{sources}

INSTRUCTIONS:
- Provide helpful, accurate answers based on the news context above
- Focus on implications for San Francisco residents
- Connect different stories when relevant
- If asked about specific details not in the context, say so honestly
- Cite sources when mentioning specific stories"""

        messages = [{"role": "system", "content": context}]
        messages += [{"role": m.role, "content": m.content} for m in history]
        messages.append({"role": "user", "content": question})

        return await self.llm.complete(messages, temperature=0.7, max_tokens=800)

    async def chat_about_event(self, messages: Sequence[ChatMessage], context: EventChatContext) -> str:
        """Chat about a timeline event's competing narratives"""
        system_prompt = f"""You are an AI assistant specialized in analyzing San Francisco cultural narratives and urban sociology.

CONTEXT FOR THIS CONVERSATION:
Event: {context.headline} (Week of {context.week_of})

Hype Narrative Summary:
{context.hype_content}

Backlash Narrative Summary:
{context.backlash_content}

Post-Battle Analysis:
{context.summary}

Help users understand the competing narratives, the cultural, economic and social tensions behind them, and what the narratives leave out. Avoid strong partisan positions.

FORMATTING RULES:
- Keep responses concise and use bullet points when appropriate
- Do NOT include your thinking process
- Keep response within {CHATBOT_MAX_RESPONSE_LENGTH} characters"""

        api_messages = [{"role": "system", "content": system_prompt}]
        api_messages += [{"role": m.role, "content": m.content} for m in messages]

        logger.info(f"Calling chat model for event {context.headline}...")
        reply = await self.llm.complete(
            api_messages,
            model=settings.LLM_CHAT_MODEL,
            temperature=0.7,
            max_tokens=1000,
        )
        return strip_thinking(reply)


def combine_posts_for_analysis(texts: Sequence[str]) -> str:
    """Number posts for the LLM prompt, blank-line separated"""
    return "\n\n".join(f"Tweet {i}: {text}" for i, text in enumerate(texts, start=1))
