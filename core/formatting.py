# =============================================================================
# core/formatting.py  —  Render a SearchResponse as Markdown text
# =============================================================================
#
# The tool's result is ONE text document.  Its layout is fixed:
#
#   # Search Results for: "<query>"
#   ## Direct Answer            (only when an answer is present and wanted)
#   ## Search Results           (always; one ### subsection per hit)
#   ## Follow-up Questions      (only when the list is non-empty)
#
# Results are rendered in provider order with the provider's score.  No
# reordering, no re-scoring.
# =============================================================================

from core.models import SearchResponse, SearchResult


def format_search_response(response: SearchResponse, include_answer: bool = True) -> str:
    """Render a SearchResponse as the Markdown document returned to the client.

    Args:
        response: The parsed provider response.
        include_answer: When False the Direct Answer section is never
            rendered, even if the provider sent an answer anyway.

    Returns:
        The formatted text.
    """
    parts = [f'# Search Results for: "{response.query}"\n\n']

    if include_answer and response.answer:
        parts.append(f"## Direct Answer\n{response.answer}\n\n")

    parts.append("## Search Results\n\n")
    for index, result in enumerate(response.results, start=1):
        parts.append(_format_result(index, result))

    if response.follow_up_questions:
        parts.append("## Follow-up Questions\n")
        for index, question in enumerate(response.follow_up_questions, start=1):
            parts.append(f"{index}. {question}\n")

    return "".join(parts)


def _format_result(index: int, result: SearchResult) -> str:
    lines = [
        f"### {index}. {result.title}\n",
        f"URL: {result.url}\n",
    ]
    if result.published_date:
        lines.append(f"Published: {result.published_date}\n")
    lines.append(f"Score: {result.score}\n\n")
    lines.append(f"{result.content}\n\n")
    lines.append("---\n\n")
    return "".join(lines)
