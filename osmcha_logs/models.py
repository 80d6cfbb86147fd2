"""Data models for changeset discussion reports."""

from dataclasses import dataclass, field
from typing import Dict, List, Union

ChangesetId = Union[int, str]

OSM_CHANGESET_URL = "https://www.openstreetmap.org/changeset/"


def changeset_url(changeset_id: ChangesetId) -> str:
    """Return the openstreetmap.org page for a changeset."""
    return f"{OSM_CHANGESET_URL}{changeset_id}"


@dataclass(frozen=True)
class Changeset:
    """A changeset as returned by the listing query."""
    id: ChangesetId
    owner_username: str

    @classmethod
    def from_feature(cls, feature: Dict) -> 'Changeset':
        """Build a changeset from a GeoJSON feature of the listing response."""
        return cls(id=feature['id'], owner_username=feature['properties']['user'])


@dataclass(frozen=True)
class CommentEntry:
    """A single comment of a changeset discussion."""
    author_username: str
    raw: Dict = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, data: Dict) -> 'CommentEntry':
        return cls(author_username=data.get('userName'), raw=data)


@dataclass
class ChangesetDiscussion:
    """A changeset joined with its (possibly empty) comment thread."""
    changeset_id: ChangesetId
    comments: List[CommentEntry] = field(default_factory=list)

    @property
    def has_comments(self) -> bool:
        return bool(self.comments)

    @property
    def last_comment(self) -> CommentEntry:
        return self.comments[-1] if self.comments else None


@dataclass
class UserReport:
    """Per-user discussion statistics for one run."""
    username: str
    total_changesets: int = 0
    with_comments: int = 0
    without_comments: int = 0
    resolved_count: int = 0
    unresolved_count: int = 0
    unresolved_changeset_urls: List[str] = field(default_factory=list)


@dataclass
class RunResult:
    """Outcome of a reporting run.

    Replaces a process-wide exit status: any recorded error marks the run
    as failed, and the shell layer turns that into a non-zero exit code.
    """
    reports: List[UserReport] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0
