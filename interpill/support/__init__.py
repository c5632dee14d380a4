from __future__ import annotations

from interpill.support.service import SupportEmailService, build_email_payload

__all__ = ["SupportEmailService", "build_email_payload"]
