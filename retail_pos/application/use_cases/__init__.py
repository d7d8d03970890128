"""Application use cases."""

from retail_pos.application.use_cases.create_invoice import (
    CreateInvoiceResult,
    CreateInvoiceUseCase,
    invoice_to_response,
)
from retail_pos.application.use_cases.generate_report import GenerateReportUseCase
from retail_pos.application.use_cases.get_dashboard import GetDashboardUseCase

__all__ = [
    "CreateInvoiceUseCase",
    "CreateInvoiceResult",
    "invoice_to_response",
    "GenerateReportUseCase",
    "GetDashboardUseCase",
]
