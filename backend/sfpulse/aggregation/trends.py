import asyncio
from typing import Dict, List, Optional, Sequence
from loguru import logger
from sqlalchemy.orm import Session

from sfpulse.config import settings
from sfpulse.repositories.timeline import upsert_event
from sfpulse.schemas.timeline import TrendProcessingReport
from sfpulse.services.social import EVIDENCE_BACKLASH_COUNT, EVIDENCE_HYPE_COUNT, SocialService
from sfpulse.services.summarizer import NarrativeService, combine_posts_for_analysis
from sfpulse.utils.dates import normalize_week


class TrendProcessor:
    """Turn each configured weekly topic into a timeline event"""

    def __init__(
        self,
        db: Session,
        social: Optional[SocialService] = None,
        narrative: Optional[NarrativeService] = None,
        pacing_seconds: Optional[float] = None,
    ):
        self.db = db
        self.social = social or SocialService()
        self.narrative = narrative or NarrativeService()
        self.pacing_seconds = settings.LLM_PACING_SECONDS if pacing_seconds is None else pacing_seconds

    async def process_topic(self, week_of: str, topic: str) -> Dict:
        """
        Evidence posts, narrative analysis and upsert for one topic

        Raises:
            ValueError: No posts on either side
            AppError: Analysis or persistence failed
        """
        hype, backlash = await asyncio.gather(
            self.social.fetch_sentiment_posts(topic, "hype", EVIDENCE_HYPE_COUNT),
            self.social.fetch_sentiment_posts(topic, "backlash", EVIDENCE_BACKLASH_COUNT),
        )
        hype_posts, backlash_posts = hype.value, backlash.value

        if not hype_posts and not backlash_posts:
            raise ValueError("No tweets found")

        logger.info(f"Fetched {len(hype_posts)} hype tweets and {len(backlash_posts)} backlash tweets")

        combined = combine_posts_for_analysis([p.text for p in hype_posts] + [p.text for p in backlash_posts])
        analysis = await self.narrative.analyze_narratives_with_retry(topic, combined)
        logger.info(f"Generated analysis for {topic}")

        event = upsert_event(self.db, normalize_week(week_of), topic, analysis, hype_posts, backlash_posts)

        return {
            "week_of": week_of,
            "topic": topic,
            "status": "success",
            "id": event.id,
            "posts": {"hype": hype.kind, "backlash": backlash.kind},
        }

    async def run(self, topics: Optional[Sequence[Dict[str, str]]] = None) -> TrendProcessingReport:
        """
        Process topics one at a time; a failing topic is reported, not raised

        Args:
            topics: ``{"week_of", "topic"}`` items, default ``settings.WEEKLY_TOPICS``
        """
        topics = settings.WEEKLY_TOPICS if topics is None else topics
        logger.info(f"Starting trend processing for {len(topics)} topics...")

        results: List[Dict] = []
        errors: List[Dict] = []

        for index, item in enumerate(topics):
            week_of, topic = item["week_of"], item["topic"]

            if index > 0 and self.pacing_seconds > 0:
                logger.info(f"Waiting {self.pacing_seconds}s to avoid rate limiting...")
                await asyncio.sleep(self.pacing_seconds)

            logger.info(f"Processing {topic} for week of {week_of}...")
            try:
                results.append(await self.process_topic(week_of, topic))
            except Exception as e:
                logger.error(f"Error processing {topic}: {e}")
                self.db.rollback()
                errors.append({"week_of": week_of, "topic": topic, "error": str(e)})

        logger.info(f"Trend processing complete: {len(results)} processed, {len(errors)} failed")
        return TrendProcessingReport(
            processed=len(results),
            failed=len(errors),
            results=results,
            errors=errors,
        )
