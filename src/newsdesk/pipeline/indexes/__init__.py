"""Outline documents linking editions together."""

from newsdesk.pipeline.indexes.documents import (
    merge_daily_index,
    merge_date_toc,
    merge_summary,
    render_article_listing,
)
from newsdesk.pipeline.indexes.index_merger import IndexMerger

__all__ = [
    "IndexMerger",
    "merge_daily_index",
    "merge_date_toc",
    "merge_summary",
    "render_article_listing",
]
