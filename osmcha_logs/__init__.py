"""OSMCHA changeset discussion report - per-user resolved/unresolved changeset counts."""

from .models import Changeset, CommentEntry, ChangesetDiscussion, UserReport, RunResult
from .errors import (OsmchaLogsError, ValidationError, NetworkError, ParseError,
                     PaginationLimitError, ConfigError)
from .validation import RequestDescriptor, validate_request
from .api_client import OsmchaAPIClient
from .changesets import list_user_changesets, get_changeset_comments
from .report_builder import ReportBuilder, is_resolved, summarize_discussions
from .output import ReportFormatter
from .user_config import UsernameConfig

__all__ = [
    'Changeset',
    'CommentEntry',
    'ChangesetDiscussion',
    'UserReport',
    'RunResult',
    'OsmchaLogsError',
    'ValidationError',
    'NetworkError',
    'ParseError',
    'PaginationLimitError',
    'ConfigError',
    'RequestDescriptor',
    'validate_request',
    'OsmchaAPIClient',
    'list_user_changesets',
    'get_changeset_comments',
    'ReportBuilder',
    'is_resolved',
    'summarize_discussions',
    'ReportFormatter',
    'UsernameConfig',
]
