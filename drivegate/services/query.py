"""Structured Drive search filters.

Drive's ``q`` parameter is a small query language. Values are quoted with
single quotes, so user text has to be escaped before it is placed in a
string literal. Build a :class:`DriveQuery` from predicates and let
:meth:`DriveQuery.render` do the quoting instead of formatting strings by hand.
"""

from dataclasses import dataclass, field


def quote(value: str) -> str:
    """Render a Drive query string literal, escaping backslashes and single quotes."""
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


@dataclass(frozen=True)
class TrashedPredicate:
    trashed: bool = False

    def render(self) -> str:
        return f"trashed = {'true' if self.trashed else 'false'}"


@dataclass(frozen=True)
class ParentPredicate:
    folder_id: str

    def render(self) -> str:
        return f"{quote(self.folder_id)} in parents"


@dataclass(frozen=True)
class NameContainsPredicate:
    text: str

    def render(self) -> str:
        return f"name contains {quote(self.text)}"


@dataclass
class DriveQuery:
    predicates: list = field(default_factory=list)

    @classmethod
    def for_listing(cls, query: str | None = None, folder_id: str | None = None) -> "DriveQuery":
        """Non-trashed files, optionally narrowed to a folder and a name fragment."""
        q = cls([TrashedPredicate(False)])
        if folder_id:
            q.predicates.append(ParentPredicate(folder_id))
        if query:
            q.predicates.append(NameContainsPredicate(query))
        return q

    def render(self) -> str:
        return " and ".join(p.render() for p in self.predicates)

    def __str__(self) -> str:
        return self.render()
