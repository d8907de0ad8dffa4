"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from credit_analytics.domain.models import Customer
from credit_analytics.infrastructure.ingestion import csv_loader


class CustomerInput(BaseModel):
    """Raw customer record; omitted fields take the ingestion defaults"""

    model_config = ConfigDict(allow_inf_nan=False)

    id: str = Field(..., min_length=1, description="Customer identifier")
    name: str = ""
    age: int = csv_loader.DEFAULT_AGE
    income: float = csv_loader.DEFAULT_INCOME
    credit_score: int = Field(csv_loader.DEFAULT_CREDIT_SCORE, description="Bureau score, 0-850")
    account_balance: float = csv_loader.DEFAULT_BALANCE
    transaction_count: int = csv_loader.DEFAULT_TRANSACTION_COUNT
    avg_transaction_amount: float = csv_loader.DEFAULT_AVG_TRANSACTION
    city: str = csv_loader.DEFAULT_CITY
    state: str = csv_loader.DEFAULT_STATE
    join_date: Optional[date] = None
    last_transaction_date: Optional[date] = None
    fraud_alerts: int = Field(csv_loader.DEFAULT_FRAUD_ALERTS, ge=0)
    payment_history: float = Field(csv_loader.DEFAULT_PAYMENT_HISTORY, description="On-time payments, %")
    utilization_rate: float = Field(csv_loader.DEFAULT_UTILIZATION, description="Credit utilization, %")
    account_age: int = Field(csv_loader.DEFAULT_ACCOUNT_AGE, ge=0, description="Months")

    @field_validator("age", "credit_score", "transaction_count", "fraud_alerts", "account_age")
    @classmethod
    def fits_float(cls, value: int) -> int:
        """Integers must convert to a finite float for scoring"""
        try:
            float(value)
        except OverflowError:
            raise ValueError("number too large")
        return value

    def to_domain(self, today: date) -> Customer:
        return Customer(
            id=self.id,
            name=self.name or f"Customer {self.id}",
            age=self.age,
            income=self.income,
            credit_score=self.credit_score,
            account_balance=self.account_balance,
            transaction_count=self.transaction_count,
            avg_transaction_amount=self.avg_transaction_amount,
            city=self.city,
            state=self.state,
            join_date=self.join_date or today,
            last_transaction_date=self.last_transaction_date or today,
            fraud_alerts=self.fraud_alerts,
            payment_history=self.payment_history,
            utilization_rate=self.utilization_rate,
            account_age=self.account_age,
        )


class PortfolioRequest(BaseModel):
    """Request body for POST /v1/portfolio/analyze and /export"""

    customers: List[CustomerInput]


class CustomerSchema(BaseModel):
    """Customer with derived risk fields"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    age: int
    income: float
    credit_score: int
    account_balance: float
    transaction_count: int
    avg_transaction_amount: float
    city: str
    state: str
    join_date: date
    last_transaction_date: date
    fraud_alerts: int
    payment_history: float
    utilization_rate: float
    account_age: int
    risk_score: int
    risk_category: str
    segment: str


class SegmentSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    segment: str
    customers: int
    avg_income: int
    avg_risk_score: int
    revenue: float
    growth_rate: int
    percentage: float


class RiskDistributionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: str
    count: int
    percentage: float
    revenue: float


class RecommendationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: str
    priority: str
    message: str


class MonthlyTrendSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: str
    new_customers: int
    total_revenue: float
    avg_risk_score: int


class InsightsSchema(BaseModel):
    """Portfolio-level insights"""

    model_config = ConfigDict(from_attributes=True)

    total_customers: int
    high_risk_count: int
    fraud_suspects: int
    premium_opportunities: int
    average_risk_score: int
    portfolio_value: float
    recommendations: List[RecommendationSchema]
    risk_distribution: List[RiskDistributionSchema]
    monthly_trends: List[MonthlyTrendSchema]


class MetricsSchema(BaseModel):
    """Headline KPIs"""

    model_config = ConfigDict(from_attributes=True)

    total_customers: int
    total_revenue: float
    average_risk_score: float
    fraud_rate: float
    average_credit_utilization: float
    default_rate: float


class FraudAlertSchema(BaseModel):
    """Customer with raised fraud alerts"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    risk_score: int
    fraud_alerts: int
    city: str


class AnalysisResponse(BaseModel):
    """Full analytics report over a portfolio"""

    customers: List[CustomerSchema]
    segments: List[SegmentSchema]
    fraud_suspects: List[str]
    top_fraud_alerts: List[FraudAlertSchema]
    insights: InsightsSchema
    metrics: MetricsSchema


class UploadStats(BaseModel):
    total_records: int
    valid_records: int
    dropped_records: int
    high_risk: int
    avg_risk_score: Optional[float] = None


class UploadResponse(AnalysisResponse):
    """Response for POST /v1/portfolio/upload"""

    upload: UploadStats


class CustomerPageSchema(BaseModel):
    """One page of a filtered, sorted customer listing"""

    model_config = ConfigDict(from_attributes=True)

    customers: List[CustomerSchema]
    total: int
    page: int
    page_size: int
    total_pages: int
