"""/v1/portfolio - scoring, segmentation and insights over a customer list"""

import time
import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from starlette.responses import Response

from credit_analytics.api.v1.schemas import (
    AnalysisResponse,
    CustomerPageSchema,
    CustomerSchema,
    FraudAlertSchema,
    InsightsSchema,
    MetricsSchema,
    PortfolioRequest,
    SegmentSchema,
    UploadResponse,
    UploadStats,
)
from credit_analytics.api.dependencies import get_request_id, get_settings
from credit_analytics.config import Settings
from credit_analytics.domain.models import Customer
from credit_analytics.domain.scoring import process_customers
from credit_analytics.domain.browsing import SORTABLE_FIELDS, browse_customers
from credit_analytics.domain.segmentation import analyze_segments
from credit_analytics.domain.fraud import detect_fraud_suspects, top_fraud_alerts
from credit_analytics.domain.insights import calculate_business_metrics, generate_business_insights
from credit_analytics.domain.exceptions import CSVFormatError
from credit_analytics.infrastructure.ingestion.csv_loader import (
    SAMPLE_CSV,
    export_customers_csv,
    load_customers_csv,
    summarize_upload,
)
from credit_analytics.infrastructure.ingestion.generator import generate_customers
from credit_analytics.infrastructure.observability.metrics import record_scoring
from credit_analytics.infrastructure.observability.logging import log_analysis

router = APIRouter()

CSV_MEDIA_TYPE = "text/csv"


def build_report(
    customers: List[Customer],
    config: Settings,
    request_id: str,
    source: str,
    as_of: Optional[date] = None,
) -> AnalysisResponse:
    """
    Run processed customers through every aggregate and shape the response.

    Flow:
    1. Segment analysis
    2. Fraud screening
    3. Insights (recommendations, distribution, trends)
    4. Headline metrics
    """
    start_time = time.time()

    segments = analyze_segments(
        customers,
        as_of=as_of,
        revenue_yield=config.revenue_yield,
        window_days=config.growth_window_days,
    )
    suspects = detect_fraud_suspects(customers, threshold=config.fraud_threshold)
    insights = generate_business_insights(
        customers,
        segments,
        revenue_yield=config.revenue_yield,
        fraud_suspects=suspects,
    )
    metrics = calculate_business_metrics(
        customers,
        revenue_yield=config.revenue_yield,
        default_probability=config.default_probability,
    )

    record_scoring(customers, len(suspects))
    duration_ms = (time.time() - start_time) * 1000
    log_analysis(request_id, source, len(customers), insights.high_risk_count, len(suspects), duration_ms)

    return AnalysisResponse(
        customers=[CustomerSchema.model_validate(c) for c in customers],
        segments=[SegmentSchema.model_validate(s) for s in segments],
        fraud_suspects=[c.id for c in suspects],
        top_fraud_alerts=[FraudAlertSchema.model_validate(c) for c in top_fraud_alerts(customers)],
        insights=InsightsSchema.model_validate(insights),
        metrics=MetricsSchema.model_validate(metrics),
    )


@router.post("/portfolio/analyze", response_model=AnalysisResponse)
def analyze_portfolio(
    request_body: PortfolioRequest,
    request: Request,
    as_of: Optional[date] = Query(None, description="Reference date for growth windows"),
    config: Settings = Depends(get_settings),
):
    """Score and analyze a list of customer records"""
    today = as_of or date.today()
    raw_customers = [c.to_domain(today) for c in request_body.customers]
    customers = process_customers(raw_customers)

    return build_report(customers, config, get_request_id(request), "api", as_of=as_of)


@router.post("/portfolio/upload", response_model=UploadResponse)
async def upload_portfolio(
    request: Request,
    as_of: Optional[date] = Query(None, description="Reference date for growth windows"),
    config: Settings = Depends(get_settings),
):
    """
    Score and analyze an uploaded CSV (raw text/csv body).

    Unparsable rows are dropped and reported in the upload stats.
    """
    request_id = get_request_id(request)
    body = await request.body()

    if len(body) > config.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Upload too large")

    try:
        # 1. Parse rows, dropping the ones that fail
        loaded = load_customers_csv(body.decode("utf-8"), today=as_of)

        # 2. Score and segment
        customers = process_customers(loaded.customers)

        # 3. Aggregate
        report = build_report(customers, config, request_id, "csv_upload", as_of=as_of)

        return UploadResponse(
            **report.model_dump(),
            upload=UploadStats(**summarize_upload(loaded, customers)),
        )

    except UnicodeDecodeError:
        raise HTTPException(status_code=422, detail="Upload must be UTF-8 text")

    except CSVFormatError as e:
        logging.warning(f"Rejected upload: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/portfolio/sample", response_model=AnalysisResponse)
def sample_portfolio(
    request: Request,
    count: Optional[int] = Query(None, ge=1, le=10_000, description="Number of customers"),
    seed: Optional[int] = Query(None, description="Seed for a reproducible portfolio"),
    config: Settings = Depends(get_settings),
):
    """Analyze a freshly generated synthetic portfolio"""
    customers = generate_customers(count or config.sample_portfolio_size, seed=seed)
    return build_report(customers, config, get_request_id(request), "synthetic")


@router.get("/portfolio/template.csv")
def download_template():
    """Sample CSV showing the accepted columns"""
    return Response(
        content=SAMPLE_CSV,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=sample_customer_data.csv"},
    )


@router.post("/portfolio/export")
def export_portfolio(request_body: PortfolioRequest):
    """Processed customers as CSV"""
    today = date.today()
    customers = process_customers([c.to_domain(today) for c in request_body.customers])
    return Response(
        content=export_customers_csv(customers),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=processed_customer_data.csv"},
    )


@router.post("/portfolio/customers", response_model=CustomerPageSchema)
def list_customers(
    request_body: PortfolioRequest,
    search: Optional[str] = Query(None, description="Substring of customer id or name"),
    risk_category: Optional[str] = Query(None, description="Low, Medium, High or all"),
    sort_by: str = Query("risk_score", description="Customer field to sort on"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    page_size: int = Query(25, ge=1, le=500),
):
    """Processed customers, searchable and paged for table views"""
    if sort_by not in SORTABLE_FIELDS:
        raise HTTPException(status_code=422, detail=f"Cannot sort by {sort_by}")

    today = date.today()
    customers = process_customers([c.to_domain(today) for c in request_body.customers])
    result = browse_customers(
        customers,
        search=search,
        risk_category=risk_category,
        sort_by=sort_by,
        descending=order == "desc",
        page=page,
        page_size=page_size,
    )
    return CustomerPageSchema.model_validate(result)
