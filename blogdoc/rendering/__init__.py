"""Section rendering: Jinja fragment templates and their input helpers."""

from .faq import FaqEntry, group_faq, is_question
from .renderer import SectionRenderer, Step, split_pros_cons, split_step
from .tables import parse_table

__all__ = [
    "FaqEntry",
    "SectionRenderer",
    "Step",
    "group_faq",
    "is_question",
    "parse_table",
    "split_pros_cons",
    "split_step",
]
