"""
Wire contracts shared by the services and the API layer.
"""

from __future__ import annotations

from interpill.contracts.summary import RiskLevel, Summary, mock_summary
from interpill.contracts.support import EmailPayload, SupportAccepted, SupportMessage

__all__ = [
    "EmailPayload",
    "RiskLevel",
    "Summary",
    "SupportAccepted",
    "SupportMessage",
    "mock_summary",
]
