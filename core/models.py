# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# Three dataclasses describe everything that flows through one search:
#
#   SearchRequest   → what we send to Tavily (built from caller arguments)
#   SearchResult    → one hit, exactly as Tavily returned it
#   SearchResponse  → the whole Tavily payload for one query
#
# None of them outlive a single tool call.  They're frozen: once built,
# nothing downstream can quietly change what was asked or what came back.
#
# THE PARSE-AND-DEFAULT STEP:
#   MCP hands us a loose dict of arguments.  parse_search_args() is the ONE
#   place that turns that dict into a SearchRequest: it rejects bad input
#   early (ValidationError) and applies every default.  Nothing else in the
#   codebase reads the raw argument dict.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional

from core.errors import ValidationError

SEARCH_DEPTHS = ("basic", "advanced")

DEFAULT_SEARCH_DEPTH = "basic"
DEFAULT_MAX_RESULTS = 5
MIN_MAX_RESULTS = 1
MAX_MAX_RESULTS = 20


# -----------------------------------------------------------------------------
# SearchRequest — the outbound request body
# -----------------------------------------------------------------------------
# include_raw_content is not a field: it is always False and the caller
# can't change it.  It only appears when the payload is serialized.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchRequest:
    """A validated, fully-defaulted Tavily search request."""

    query: str
    search_depth: str = DEFAULT_SEARCH_DEPTH
    include_answer: bool = True
    max_results: int = DEFAULT_MAX_RESULTS
    include_domains: Optional[tuple[str, ...]] = None   # None = omit from payload
    exclude_domains: Optional[tuple[str, ...]] = None

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body Tavily expects.

        Domain filters are only present when the caller set them.
        """
        payload: dict[str, Any] = {
            "query": self.query,
            "search_depth": self.search_depth,
            "include_answer": self.include_answer,
            "include_raw_content": False,
            "max_results": self.max_results,
        }
        if self.include_domains is not None:
            payload["include_domains"] = list(self.include_domains)
        if self.exclude_domains is not None:
            payload["exclude_domains"] = list(self.exclude_domains)
        return payload


# -----------------------------------------------------------------------------
# SearchResult — one ranked hit
# -----------------------------------------------------------------------------
# score is deliberately typed Any: whatever number Tavily sends (0.95, 1, …)
# is rendered as-is.  We don't re-score, clamp, or coerce.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchResult:
    """One search hit, sourced verbatim from the provider."""

    title: str
    url: str
    content: str
    score: Any = None
    published_date: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "SearchResult":
        return cls(
            title=payload.get("title", ""),
            url=payload.get("url", ""),
            content=payload.get("content", ""),
            score=payload.get("score"),
            published_date=payload.get("published_date") or None,
        )


# -----------------------------------------------------------------------------
# SearchResponse — the full provider payload for one query
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchResponse:
    """Tavily's answer to one search.  Transient: lives for one call."""

    query: str
    answer: Optional[str] = None
    results: tuple[SearchResult, ...] = field(default_factory=tuple)
    follow_up_questions: Optional[tuple[str, ...]] = None
    # Carried through but not rendered in the text output.
    response_time: Optional[float] = None
    images: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: dict[str, Any], fallback_query: str = "") -> "SearchResponse":
        """Build a SearchResponse from Tavily's JSON body.

        Args:
            payload: The decoded JSON object.
            fallback_query: Used for the heading if Tavily didn't echo the query.
        """
        follow_ups = payload.get("follow_up_questions")
        if isinstance(follow_ups, (list, tuple)):
            follow_ups = [q for q in follow_ups if isinstance(q, str) and q]
        else:
            # A bare string would otherwise render one question per character.
            follow_ups = None
        return cls(
            query=payload.get("query") or fallback_query,
            answer=payload.get("answer") or None,
            results=tuple(
                SearchResult.from_payload(item) for item in payload.get("results") or []
            ),
            follow_up_questions=tuple(follow_ups) if follow_ups else None,
            response_time=payload.get("response_time"),
            images=tuple(
                image for image in payload.get("images") or [] if isinstance(image, str)
            ),
        )


# =============================================================================
# PUBLIC API: parse_search_args
# =============================================================================
def parse_search_args(arguments: Optional[dict[str, Any]]) -> SearchRequest:
    """Turn a loosely-typed MCP argument bag into a SearchRequest.

    Defaulting policy:
      - search_depth     → "basic" if absent
      - include_answer   → True unless explicitly False
      - max_results      → 5 if absent (or 0/None)
      - include_domains / exclude_domains → omitted if absent

    Unknown keys are ignored.

    Raises:
        ValidationError: if query is missing/blank or any field has the
            wrong type or is out of range.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise ValidationError("Tool arguments must be an object")

    query = arguments.get("query")
    if not isinstance(query, str) or not query.strip():
        raise ValidationError("'query' is required and must be a non-empty string")

    search_depth = arguments.get("search_depth") or DEFAULT_SEARCH_DEPTH
    if search_depth not in SEARCH_DEPTHS:
        raise ValidationError(
            f"'search_depth' must be one of {', '.join(SEARCH_DEPTHS)}; got {search_depth!r}"
        )

    return SearchRequest(
        query=query,
        search_depth=search_depth,
        include_answer=arguments.get("include_answer") is not False,
        max_results=_parse_max_results(arguments.get("max_results")),
        include_domains=_parse_domains(arguments, "include_domains"),
        exclude_domains=_parse_domains(arguments, "exclude_domains"),
    )


def _parse_max_results(value: Any) -> int:
    if value is None or value == 0:
        return DEFAULT_MAX_RESULTS
    # bool is an int subclass; True is not a result count.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"'max_results' must be a number; got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"'max_results' must be a whole number; got {value!r}")
        value = int(value)
    if not MIN_MAX_RESULTS <= value <= MAX_MAX_RESULTS:
        raise ValidationError(
            f"'max_results' must be between {MIN_MAX_RESULTS} and {MAX_MAX_RESULTS}; got {value}"
        )
    return value


def _parse_domains(arguments: dict[str, Any], key: str) -> Optional[tuple[str, ...]]:
    value = arguments.get(key)
    if value is None:
        return None
    if not isinstance(value, (list, tuple)) or not all(isinstance(d, str) for d in value):
        raise ValidationError(f"'{key}' must be a list of strings")
    return tuple(value)
