import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import quote_plus

SortEntry = Union[str, Dict[str, str]]


@dataclass
class Query:
    """A selector query for the ``_find`` endpoint.

    :param selector: The filter expression, e.g. ``{"year": {"$gt": 2010}}``.
    :param fields: Names of the fields to return for each matching document. All fields are
        returned if omitted.
    :param sort: A list of field names, or single-entry ``{field: direction}`` mappings where
        direction is ``"asc"`` or ``"desc"``.
    :param limit: Maximum number of documents to return.
    :param skip: Number of matching documents to skip before returning results.
    :param bookmark: The ``bookmark`` from a previous result, to fetch the next page.
    :param use_index: A design document name, or ``[ddoc, index]`` pair, to run the query with.
    :param extra: Any other ``_find`` members (``execution_stats``, ``conflicts``, ``r``, ...),
        sent as given.
    """

    selector: Any
    fields: List[str] = field(default_factory=list)
    sort: List[SortEntry] = field(default_factory=list)
    limit: Optional[int] = None
    skip: Optional[int] = None
    bookmark: Optional[str] = None
    use_index: Union[str, List[str], None] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.fields, str):
            raise ValueError(f"'fields' must be a list of field names, not {self.fields!r}.")
        if isinstance(self.sort, (str, dict)):
            raise ValueError(f"'sort' must be a list, not {self.sort!r}.")

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Query":
        if "selector" not in d:
            raise ValueError("A query must include a 'selector'.")
        known = {"selector", "fields", "sort", "limit", "skip", "bookmark", "use_index"}
        return cls(
            selector=d["selector"],
            fields=d.get("fields") or [],
            sort=d.get("sort") or [],
            limit=d.get("limit"),
            skip=d.get("skip"),
            bookmark=d.get("bookmark"),
            use_index=d.get("use_index"),
            extra={k: v for k, v in d.items() if k not in known},
        )

    def to_json(self) -> dict:
        """Return the request body, leaving out members that are unset."""
        body: Dict[str, Any] = {"selector": self.selector}
        if self.fields:
            body["fields"] = list(self.fields)
        if self.sort:
            body["sort"] = [s if isinstance(s, str) else dict(s) for s in self.sort]
        if self.limit:
            body["limit"] = self.limit
        if self.skip:
            body["skip"] = self.skip
        if self.bookmark:
            body["bookmark"] = self.bookmark
        if self.use_index:
            body["use_index"] = self.use_index
        body.update(self.extra)
        return body


def _encode_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return quote_plus(value) if value else None
    # bool before int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (list, tuple, dict)):
        return quote_plus(json.dumps(value, separators=(",", ":")))
    return quote_plus(str(value))


def to_query_string(params: Optional[Mapping[str, Any]]) -> str:
    """Encode a parameter mapping as a URL query string, without the leading ``?``.

    Empty strings and ``None`` values are dropped. Booleans become ``true``/``false``,
    integers their decimal form, and lists or mappings compact JSON. Strings and all other
    values are form-escaped.
    """
    if not params:
        return ""
    pairs = []
    for name, value in params.items():
        encoded = _encode_value(value)
        if encoded is None:
            continue
        pairs.append(f"{quote_plus(str(name))}={encoded}")
    return "&".join(pairs)


QueryLike = Union[Query, Mapping[str, Any]]


def as_request_body(query: QueryLike) -> dict:
    if isinstance(query, Query):
        return query.to_json()
    return Query.from_dict(query).to_json()
