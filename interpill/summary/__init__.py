from __future__ import annotations

from interpill.summary.service import AISummaryService, derive_prompt, parse_summary

__all__ = ["AISummaryService", "derive_prompt", "parse_summary"]
