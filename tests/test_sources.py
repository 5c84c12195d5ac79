from types import SimpleNamespace

from jigoor.signals import Source, dedupe_sources, sources_from_response


def test_dedupe_keeps_first_position_and_last_title():
    sources = [Source("a", "X"), Source("b", "Y"), Source("a", "Z")]
    assert dedupe_sources(sources) == [Source("a", "Z"), Source("b", "Y")]


def test_dedupe_skips_empty_uri():
    assert dedupe_sources([Source("", "nothing"), Source("c", "C")]) == [Source("c", "C")]


def _chunk(uri=None, title=None, web=True):
    return SimpleNamespace(web=SimpleNamespace(uri=uri, title=title) if web else None)


def test_sources_from_response_reads_grounding_chunks():
    response = SimpleNamespace(
        candidates=[
            SimpleNamespace(
                grounding_metadata=SimpleNamespace(
                    grounding_chunks=[
                        _chunk("https://a.example/1", "One"),
                        _chunk("https://b.example/2", None),
                        _chunk(None, "No uri"),
                        _chunk(web=False),
                    ]
                )
            )
        ]
    )
    assert sources_from_response(response) == [
        Source("https://a.example/1", "One"),
        Source("https://b.example/2", "Untitled Source"),
    ]


def test_sources_from_response_without_metadata():
    assert sources_from_response(SimpleNamespace(candidates=None)) == []
    assert sources_from_response(SimpleNamespace(candidates=[SimpleNamespace(grounding_metadata=None)])) == []
    assert sources_from_response(object()) == []
