from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sfpulse.aggregation.trends import TrendProcessor
from sfpulse.api.deps import verify_cron_secret
from sfpulse.database import get_db
from sfpulse.schemas import APIResponse

router = APIRouter(prefix="/trends", tags=["trends"])


def get_trend_processor(db: Session = Depends(get_db)) -> TrendProcessor:
    return TrendProcessor(db)


@router.post(
    "/process",
    response_model=APIResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(verify_cron_secret)],
)
async def process_trends(processor: TrendProcessor = Depends(get_trend_processor)):
    """
    Build timeline events for every configured weekly topic

    Failures are per topic: the response is 200 with ``processed``/``failed``
    counts and the individual errors.
    """
    report = await processor.run()
    return APIResponse(
        success=True,
        data=report,
        message=f"Processed {report.processed} topics, {report.failed} failed",
    )
