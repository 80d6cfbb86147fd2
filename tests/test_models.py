"""
Unit tests for the report data models
"""

import pytest

from osmcha_logs.models import (Changeset, ChangesetDiscussion, CommentEntry, RunResult, UserReport,
                                changeset_url)


class TestUserReport:
    """Test cases for UserReport dataclass."""

    def test_user_report_initialization(self):
        """Test that UserReport initializes with default values."""
        report = UserReport(username='alice')
        assert report.total_changesets == 0
        assert report.with_comments == 0
        assert report.without_comments == 0
        assert report.resolved_count == 0
        assert report.unresolved_count == 0
        assert report.unresolved_changeset_urls == []

    def test_url_lists_are_not_shared(self):
        first = UserReport(username='alice')
        second = UserReport(username='bob')
        first.unresolved_changeset_urls.append('x')
        assert second.unresolved_changeset_urls == []


class TestChangesetModels:
    """Test cases for Changeset, CommentEntry and ChangesetDiscussion."""

    def test_changeset_from_feature(self):
        changeset = Changeset.from_feature({'id': 42, 'properties': {'user': 'alice', 'area': 3}})
        assert changeset == Changeset(id=42, owner_username='alice')

    def test_comment_from_api(self):
        data = {'userName': 'bob', 'message': 'Is this a duplicate?'}
        entry = CommentEntry.from_api(data)
        assert entry.author_username == 'bob'
        assert entry.raw == data

    def test_comment_equality_ignores_raw_fields(self):
        assert CommentEntry.from_api({'userName': 'bob', 'date': 'x'}) == CommentEntry('bob')

    def test_discussion_without_comments(self):
        discussion = ChangesetDiscussion(changeset_id=1)
        assert discussion.has_comments is False
        assert discussion.last_comment is None

    def test_discussion_last_comment(self):
        discussion = ChangesetDiscussion(1, [CommentEntry('bob'), CommentEntry('alice')])
        assert discussion.has_comments is True
        assert discussion.last_comment.author_username == 'alice'

    def test_changeset_url(self):
        assert changeset_url(123) == 'https://www.openstreetmap.org/changeset/123'
        assert changeset_url('456') == 'https://www.openstreetmap.org/changeset/456'


class TestRunResult:
    """Test cases for RunResult exit status."""

    def test_success(self):
        result = RunResult()
        assert result.failed is False
        assert result.exit_code == 0

    def test_failure(self):
        result = RunResult(errors=['bob: connection reset'])
        assert result.failed is True
        assert result.exit_code == 1


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
