from __future__ import annotations

from typing import Any, Dict, Iterable, List

from .types import Source


def dedupe_sources(sources: Iterable[Source]) -> List[Source]:
    """Collapse citations by uri.

    A later duplicate overwrites the title of an earlier one but keeps the
    earlier position (dict insertion order). Empty uris are dropped.
    """

    by_uri: Dict[str, Source] = {}
    for source in sources:
        if not source.uri:
            continue
        by_uri[source.uri] = source
    return list(by_uri.values())


def sources_from_response(response: Any) -> List[Source]:
    """Read grounding citations off a generate_content response.

    Path: candidates[0].grounding_metadata.grounding_chunks[*].web.{uri,title}.
    Any missing level yields no sources rather than an error.
    """

    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    out: List[Source] = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None) or ""
        title = getattr(web, "title", None) or "Untitled Source"
        if uri:
            out.append(Source(uri=uri, title=title))
    return out
