"""Jira field names: resolution, suggestions, and value normalization.

Users ask for columns by field id ("customfield_10016") or by friendly name
("Story Points", case-insensitive). resolve_fields() maps those tokens to the
ids sent to the search API and the headers shown in the table. Unknown tokens
are dropped with a "did you mean" hint computed by edit distance.

Usage as library:
    lookup = FieldLookup.from_catalog(client_fields)
    resolved = resolve_fields(["key", "asignee", "Status"], lookup)
    resolved.query_fields   # ["issuekey", "status"]
    resolved.columns        # [Column("Key", "issuekey"), Column("Status", "status")]
"""

import json
import sys
from dataclasses import dataclass, field

from jiri.colors import yellow

DEFAULT_FIELDS = ("key", "summary")

SUGGESTION_LIMIT = 3
SUGGESTION_MAX_DISTANCE = 3

CUSTOM_FIELD_PREFIX = "customfield_"


@dataclass
class FieldLookup:
    """Two-way map between field ids and friendly names.

    id_to_name keeps catalog order; name_to_id is keyed by lowercased name.
    """
    id_to_name: dict = field(default_factory=dict)
    name_to_id: dict = field(default_factory=dict)

    @classmethod
    def from_catalog(cls, catalog):
        """Build a lookup from the /rest/api/3/field response (list of dicts)."""
        lookup = cls()
        for f in catalog or []:
            fid = f.get("id")
            name = f.get("name")
            if fid and name:
                lookup.id_to_name[fid] = name
                lookup.name_to_id[name.lower()] = fid
        return lookup

    def friendly(self, field_id):
        return self.id_to_name.get(field_id, field_id)


@dataclass(frozen=True)
class Column:
    header: str
    key: str


@dataclass
class ResolvedFields:
    query_fields: list
    columns: list


# --- Suggestions ---

def levenshtein(a, b):
    """Edit distance with unit-cost insert, delete, and substitute."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def suggest_fields(name, lookup, limit=SUGGESTION_LIMIT, max_distance=SUGGESTION_MAX_DISTANCE):
    """Return up to `limit` friendly names within `max_distance` edits of name.

    Closest first; ties keep catalog order.
    """
    needle = name.lower()
    scored = []
    for candidate in lookup.id_to_name.values():
        score = levenshtein(needle, candidate.lower())
        if score <= max_distance:
            scored.append((score, candidate))
    scored.sort(key=lambda s: s[0])
    return [candidate for _, candidate in scored[:limit]]


def field_miss_message(name, suggestions):
    if not suggestions:
        return f"Field '{name}' not found."
    return f"Field '{name}' not found. Did you mean: {', '.join(suggestions)}?"


def print_field_miss(name, suggestions, color=False):
    print(yellow(field_miss_message(name, suggestions), on=color), file=sys.stderr)


# --- Resolution ---

def resolve_fields(requested, lookup, on_miss=None):
    """Map requested field tokens to query field ids and display columns.

    Args:
        requested: Field tokens as typed by the user (ids or friendly names).
        lookup: FieldLookup for the site.
        on_miss: Called as on_miss(name, suggestions) for each unknown token.
            Defaults to printing a hint on stderr.

    Returns:
        ResolvedFields. Unknown tokens contribute nothing. If nothing resolves,
        both lists fall back to key and summary.
    """
    on_miss = on_miss or print_field_miss
    query_fields = []
    columns = []

    for raw in requested:
        name = raw.strip()
        if not name:
            continue

        if name in lookup.id_to_name:
            columns.append(Column(header=lookup.id_to_name.get(name) or name, key=name))
            query_fields.append(name)
            continue

        matched_id = lookup.name_to_id.get(name.lower())
        if matched_id:
            columns.append(Column(header=name, key=matched_id))
            query_fields.append(matched_id)
            continue

        on_miss(name, suggest_fields(name, lookup))

    if not query_fields:
        query_fields = list(DEFAULT_FIELDS)
        columns = [Column(header=f, key=f) for f in DEFAULT_FIELDS]

    return ResolvedFields(query_fields=query_fields, columns=columns)


def parse_field_list(text):
    """Split a comma-separated --fields value; empty items are skipped."""
    return [s.strip() for s in text.split(",") if s.strip()]


# --- Value normalization ---

def _scalar(val):
    if isinstance(val, str):
        return val or None
    if isinstance(val, (int, float)) and not isinstance(val, bool):
        return _format_number(val)
    return None


def _nested(val):
    return normalize_value(val) if val is not None else None


# Ordered extraction rules for Jira JSON objects (users, statuses, options,
# sprints, cascading selects). The first rule yielding a value wins.
VALUE_RULES = (
    ("displayName", _scalar),
    ("name", _scalar),
    ("value", _scalar),
    ("title", _scalar),
    ("label", _scalar),
    ("key", _scalar),
    ("child", _nested),
    ("parent", _nested),
)


def _format_number(val):
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    return str(val)


def normalize_value(val):
    """Render an arbitrary Jira field value as a display string."""
    if val is None:
        return ""
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, str):
        return val
    if isinstance(val, (int, float)):
        return _format_number(val)
    if isinstance(val, list):
        parts = [normalize_value(v) for v in val]
        return ", ".join(p for p in parts if p != "")
    if isinstance(val, dict):
        for attr, extract in VALUE_RULES:
            if attr in val:
                result = extract(val[attr])
                if result is not None:
                    return result
    return json.dumps(val, separators=(",", ":"), ensure_ascii=False)


def get_field_value(issue, field_id):
    """Return the display string of one field of a search-result issue."""
    lowered = field_id.lower()
    fields = issue.get("fields") or {}
    if lowered in ("key", "issuekey"):
        return issue.get("key") or fields.get("key") or ""
    if lowered == "id":
        return str(issue.get("id") or "")
    return normalize_value(fields.get(field_id))


# --- Listing ---

def is_custom_field(field_id):
    return field_id.startswith(CUSTOM_FIELD_PREFIX)


def sort_fields_for_display(field_ids, lookup):
    """System fields before custom fields, then by friendly name (case-insensitive)."""
    return sorted(
        field_ids,
        key=lambda fid: (is_custom_field(fid), lookup.friendly(fid).casefold()),
    )


def format_field_label(field_id, lookup):
    friendly = lookup.id_to_name.get(field_id)
    return f'"{friendly}" ({field_id})' if friendly else field_id
