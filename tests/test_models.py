import pytest

from core.errors import ValidationError
from core.models import SearchRequest, SearchResponse, SearchResult, parse_search_args


def test_query_only_gets_all_defaults():
    request = parse_search_args({"query": "test query"})

    assert request == SearchRequest(query="test query")
    assert request.to_payload() == {
        "query": "test query",
        "search_depth": "basic",
        "include_answer": True,
        "include_raw_content": False,
        "max_results": 5,
    }


def test_domain_filters_are_omitted_not_empty_when_absent():
    payload = parse_search_args({"query": "q"}).to_payload()

    assert "include_domains" not in payload
    assert "exclude_domains" not in payload


def test_explicit_fields_are_kept():
    request = parse_search_args(
        {
            "query": "test query",
            "search_depth": "advanced",
            "include_answer": False,
            "max_results": 10,
            "include_domains": ["example.com"],
            "exclude_domains": ["spam.com"],
        }
    )

    assert request.search_depth == "advanced"
    assert request.include_answer is False
    assert request.max_results == 10
    assert request.to_payload()["include_domains"] == ["example.com"]
    assert request.to_payload()["exclude_domains"] == ["spam.com"]


def test_explicit_empty_domain_list_is_forwarded():
    payload = parse_search_args({"query": "q", "include_domains": []}).to_payload()

    assert payload["include_domains"] == []


@pytest.mark.parametrize("value", [None, 0, "yes", 1])
def test_include_answer_is_true_unless_explicitly_false(value):
    assert parse_search_args({"query": "q", "include_answer": value}).include_answer is True


def test_zero_or_null_max_results_falls_back_to_default():
    assert parse_search_args({"query": "q", "max_results": 0}).max_results == 5
    assert parse_search_args({"query": "q", "max_results": None}).max_results == 5


def test_whole_float_max_results_is_accepted():
    assert parse_search_args({"query": "q", "max_results": 3.0}).max_results == 3


def test_unknown_keys_are_ignored():
    request = parse_search_args({"query": "q", "include_raw_content": True, "extra": 1})

    assert request.to_payload()["include_raw_content"] is False


@pytest.mark.parametrize(
    "arguments",
    [
        None,
        {},
        {"query": ""},
        {"query": "   "},
        {"query": 42},
        {"query": ["a"]},
    ],
)
def test_missing_or_invalid_query_is_rejected(arguments):
    with pytest.raises(ValidationError, match="query"):
        parse_search_args(arguments)


def test_non_dict_arguments_are_rejected():
    with pytest.raises(ValidationError):
        parse_search_args(["query"])


@pytest.mark.parametrize("value", [21, -1, 2.5, "5", True])
def test_bad_max_results_is_rejected(value):
    with pytest.raises(ValidationError, match="max_results"):
        parse_search_args({"query": "q", "max_results": value})


def test_unknown_search_depth_is_rejected():
    with pytest.raises(ValidationError, match="search_depth"):
        parse_search_args({"query": "q", "search_depth": "deep"})


def test_domains_must_be_list_of_strings():
    with pytest.raises(ValidationError, match="include_domains"):
        parse_search_args({"query": "q", "include_domains": "example.com"})
    with pytest.raises(ValidationError, match="exclude_domains"):
        parse_search_args({"query": "q", "exclude_domains": [1, 2]})


def test_request_is_immutable():
    request = parse_search_args({"query": "q"})

    with pytest.raises(AttributeError):
        request.query = "other"


def test_response_from_payload_keeps_provider_order_and_scores(sample_payload):
    sample_payload["results"].append(
        {"title": "Second", "url": "https://b.example", "content": "b", "score": 1}
    )

    response = SearchResponse.from_payload(sample_payload)

    assert response.query == "test query"
    assert response.answer == "Test answer"
    assert response.response_time == 1.5
    assert [r.title for r in response.results] == ["Test Result", "Second"]
    assert response.results[0] == SearchResult(
        title="Test Result",
        url="https://example.com",
        content="Test content",
        score=0.95,
        published_date="2024-01-01",
    )
    assert response.results[1].score == 1
    assert response.results[1].published_date is None
    assert response.follow_up_questions == ("What is this?",)


def test_response_from_minimal_payload_uses_fallback_query():
    response = SearchResponse.from_payload({}, fallback_query="asked")

    assert response.query == "asked"
    assert response.answer is None
    assert response.results == ()
    assert response.follow_up_questions is None
    assert response.images == ()


def test_follow_up_questions_must_be_a_list():
    response = SearchResponse.from_payload({"query": "q", "follow_up_questions": "What is this?"})

    assert response.follow_up_questions is None


def test_follow_up_questions_keep_only_string_items():
    response = SearchResponse.from_payload(
        {"query": "q", "follow_up_questions": ["First?", None, 3, "Second?"]}
    )

    assert response.follow_up_questions == ("First?", "Second?")
