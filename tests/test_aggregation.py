from extreme_search.models.research import ToolCallRecord
from extreme_search.services.aggregation import aggregate_sources, extract_charts


def test_aggregate_keeps_last_occurrence_per_url(helpers):
    first = helpers.make_result("https://a.example.com", content="search snippet")
    other = helpers.make_result("https://b.example.com", content="b")
    last = helpers.make_result("https://a.example.com", content="full text", title="Full")

    sources = aggregate_sources([first, other, last], max_chars=100)

    assert [s.url for s in sources] == ["https://a.example.com", "https://b.example.com"]
    assert sources[0].title == "Full"
    assert sources[0].content == "full text..."


def test_aggregate_caps_content_length(helpers):
    long = helpers.make_result("https://a.example.com", content="x" * 5000)

    [source] = aggregate_sources([long], max_chars=3000)

    assert len(source.content) == 3003
    assert source.content.endswith("...")
    assert long.content == "x" * 5000


def test_aggregate_empty():
    assert aggregate_sources([]) == []


def test_extract_charts_only_from_code_tools():
    records = [
        ToolCallRecord("1", "web_search", {"query": "q"}, [{"charts": ["nope"]}]),
        ToolCallRecord("2", "code_runner", {}, {"result": 1, "charts": [{"type": "line"}]}),
        ToolCallRecord("3", "codeRunner", {}, {"charts": [{"type": "bar"}, {"type": "pie"}]}),
        ToolCallRecord("4", "code_runner", {}, {"result": "no charts"}),
    ]

    assert extract_charts(records) == [{"type": "line"}, {"type": "bar"}, {"type": "pie"}]


def test_extract_charts_without_code_calls():
    assert extract_charts([ToolCallRecord("1", "web_search", {}, [])]) == []
