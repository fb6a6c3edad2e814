"""Grammars of the three outline documents and their merge rules.

Every merge takes the current document text (None if the file does not
exist yet) and returns the new text. Merging an edition that is already
listed returns the input text unchanged, so callers can compare the
result to decide whether anything needs writing.
"""

from typing import List, Optional, Sequence, Union

from newsdesk.core.article import EnrichedArticle
from newsdesk.core.edition import group_by_category
from newsdesk.core.enums import TimeSlot
from newsdesk.pipeline.indexes.outline import (
    block_contains,
    entry_block_end,
    find_line,
    find_line_containing,
    find_line_starting_with,
    insert_lines,
    join_lines,
    split_lines,
)
from newsdesk.utils.text_utils import slugify_title, upcase

SUMMARY_SEED = ["# Summary", "", "[Home](./home.md)", "- [Daily News](./daily_news.md)"]
SUMMARY_ANCHOR = "- [Daily News]"
SUMMARY_ENTRY_PREFIX = "        - "

DAILY_INDEX_TITLE = "# Daily News Index"
DAILY_INDEX_ENTRY_PREFIX = "    - "

SlotLike = Union[TimeSlot, str]


def slot_label(time_slot: SlotLike) -> str:
    """Display label of a time slot, e.g. "Morning"."""
    value = time_slot.value if isinstance(time_slot, TimeSlot) else str(time_slot)
    return upcase(value)


# SUMMARY.md


def summary_date_heading(local_date: str) -> str:
    return f"    - [{local_date}](./{local_date}.md)"


def summary_entry(time_slot: SlotLike, filename: str) -> str:
    return f"        - [{slot_label(time_slot)}](./{filename})"


def merge_summary(
    text: Optional[str], local_date: str, time_slot: SlotLike, filename: str
) -> str:
    """Add an edition to the mdBook SUMMARY.md navigation.

    New dates go directly below the Daily News anchor, so the newest date
    comes first. The anchor is appended when the document lacks it.
    """
    lines = split_lines(text) if text is not None else list(SUMMARY_SEED)
    heading = summary_date_heading(local_date)
    entry = summary_entry(time_slot, filename)

    heading_index = find_line(lines, heading)
    if heading_index is not None:
        end = entry_block_end(lines, heading_index, SUMMARY_ENTRY_PREFIX)
        if block_contains(lines, heading_index + 1, end, entry):
            return text
        return join_lines(insert_lines(lines, end, [entry]))

    anchor_index = find_line_containing(lines, SUMMARY_ANCHOR)
    if anchor_index is None:
        lines.append(SUMMARY_SEED[-1])
        anchor_index = len(lines) - 1
    return join_lines(insert_lines(lines, anchor_index + 1, [heading, entry]))


# daily_news.md


def daily_index_date_heading(local_date: str) -> str:
    return f"- [**{local_date}**](./{local_date}.md)"


def daily_index_entry(time_slot: SlotLike, filename: str) -> str:
    return f"    - [{slot_label(time_slot)}](./{filename})"


def merge_daily_index(
    text: Optional[str], local_date: str, time_slot: SlotLike, filename: str
) -> str:
    """Add an edition to the daily_news.md master index.

    New dates go right after the title, separated by a blank line, so the
    newest date comes first. Without a title they are appended at the end.
    """
    lines = split_lines(text) if text is not None else [DAILY_INDEX_TITLE]
    heading = daily_index_date_heading(local_date)
    entry = daily_index_entry(time_slot, filename)

    heading_index = find_line(lines, heading)
    if heading_index is not None:
        end = entry_block_end(lines, heading_index, DAILY_INDEX_ENTRY_PREFIX)
        if block_contains(lines, heading_index + 1, end, entry):
            return text
        return join_lines(insert_lines(lines, end, [entry]))

    title_index = find_line_starting_with(lines, DAILY_INDEX_TITLE)
    if title_index is None:
        return join_lines(lines + [heading, entry])
    return join_lines(insert_lines(lines, title_index + 1, ["", heading, entry]))


# {date}.md


def date_toc_title(local_date: str) -> str:
    return f"# Editions published on {local_date}"


def date_toc_entry(time_slot: SlotLike, filename: str) -> str:
    return f"- [{slot_label(time_slot)}](./{filename})"


def render_article_listing(
    articles: Sequence[EnrichedArticle], filename: str
) -> List[str]:
    """Category and article lines nested under an edition link.

    Categories are sorted by name; articles keep their edition order.
    Article anchors are the title slug followed by ``---`` and the source
    tag, matching the edition Markdown headings.
    """
    lines = []
    for category, members in group_by_category(articles).items():
        lines.append(f"\t- [**{category}**]({filename}#{slugify_title(category)})")
        for article in members:
            slug = slugify_title(article.title)
            tag = article.source_tag
            if tag:
                lines.append(
                    f"\t\t- <small>`{tag}`</small> - "
                    f"[{article.title}]({filename}#{slug}---{tag})"
                )
            else:
                lines.append(f"\t\t- [{article.title}]({filename}#{slug})")
    return lines


def merge_date_toc(
    text: Optional[str],
    local_date: str,
    time_slot: SlotLike,
    filename: str,
    articles: Sequence[EnrichedArticle] = (),
) -> str:
    """Add an edition and its article listing to the per-date TOC.

    The edition link and listing are appended at the end of the file.
    An edition that is already linked leaves the document as it is,
    including the listing written the first time.
    """
    lines = split_lines(text) if text is not None else [date_toc_title(local_date), ""]
    entry = date_toc_entry(time_slot, filename)

    if find_line(lines, entry) is not None:
        return text

    return join_lines(lines + [entry] + render_article_listing(articles, filename))
