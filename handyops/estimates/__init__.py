"""Estimate building and rendering"""
from .builder import (
    EMPTY,
    HAS_SELECTION,
    CONVERTING,
    PRINTING,
    EMAILING,
    EstimateBuilder,
    clamp_quantity,
)
from .render import EmailDraft, estimate_lines, estimate_summary, render_estimate_email, render_estimate_html

__all__ = [
    'EMPTY',
    'HAS_SELECTION',
    'CONVERTING',
    'PRINTING',
    'EMAILING',
    'EstimateBuilder',
    'clamp_quantity',
    'EmailDraft',
    'estimate_lines',
    'estimate_summary',
    'render_estimate_email',
    'render_estimate_html',
]
