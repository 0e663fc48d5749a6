"""Common request dependencies."""
from typing import Annotated, TypeAlias

from fastapi import Depends
from sqlalchemy.orm import Session

from selfemploy.db.session import get_db
from selfemploy.services.financial_data_service import FinancialDataService
from selfemploy.services.notification import DeadlineNotificationService
from selfemploy.services.submission_service import SubmissionRepository
from selfemploy.services.tax_periods import TaxPeriodEngine

DbDep: TypeAlias = Annotated[Session, Depends(get_db)]


def get_financial_data_service(db: DbDep) -> FinancialDataService:
    return FinancialDataService(db)


def get_submission_repository(db: DbDep) -> SubmissionRepository:
    return SubmissionRepository(db)


def get_period_engine(
    financial_data: Annotated[FinancialDataService, Depends(get_financial_data_service)],
    submissions: Annotated[SubmissionRepository, Depends(get_submission_repository)],
) -> TaxPeriodEngine:
    return TaxPeriodEngine(financial_data, submissions)


def get_notification_service(db: DbDep) -> DeadlineNotificationService:
    return DeadlineNotificationService(db)


FinancialDataDep: TypeAlias = Annotated[FinancialDataService, Depends(get_financial_data_service)]
SubmissionsDep: TypeAlias = Annotated[SubmissionRepository, Depends(get_submission_repository)]
PeriodEngineDep: TypeAlias = Annotated[TaxPeriodEngine, Depends(get_period_engine)]
NotificationServiceDep: TypeAlias = Annotated[DeadlineNotificationService, Depends(get_notification_service)]
