"""Enumerations used across the performance core."""

from enum import Enum


class KPICategory(str, Enum):
    SALES = "sales"
    MARKETING = "marketing"
    OPERATIONS = "operations"
    FINANCE = "finance"
    CUSTOMER_SERVICE = "customer_service"
    HUMAN_RESOURCES = "human_resources"
    QUALITY = "quality"
    PRODUCTIVITY = "productivity"
    INNOVATION = "innovation"
    COMPLIANCE = "compliance"


class FeedbackType(str, Enum):
    POSITIVE = "positive"
    IMPROVEMENT = "improvement"


class ReportFormat(str, Enum):
    PDF = "pdf"
    CSV = "csv"
    EXCEL = "excel"


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"
