from fastapi import APIRouter, Depends
from loguru import logger

from sfpulse.schemas import APIResponse, ChatbotRequest, NewsQARequest
from sfpulse.services.summarizer import NarrativeService

router = APIRouter(tags=["qa"])


def get_narrative_service() -> NarrativeService:
    return NarrativeService()


@router.post("/news-qa", response_model=APIResponse, response_model_exclude_none=True)
async def news_qa(
    request: NewsQARequest,
    narrative: NarrativeService = Depends(get_narrative_service)
):
    """Answer a question about one category of a weekly digest"""
    logger.info(f"News QA for {request.news.category} (week of {request.week_of})")
    answer = await narrative.answer_news_question(
        request.question,
        request.news,
        request.week_of,
        request.conversation_history,
    )
    return APIResponse(success=True, data={"answer": answer})


@router.post("/chatbot", response_model=APIResponse, response_model_exclude_none=True)
async def chatbot(
    request: ChatbotRequest,
    narrative: NarrativeService = Depends(get_narrative_service)
):
    """Chat about the competing narratives of a timeline event"""
    reply = await narrative.chat_about_event(request.messages, request.context)
    return APIResponse(success=True, data={"response": reply})
