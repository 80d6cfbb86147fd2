"""Builds per-user changeset discussion reports."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date
from typing import Dict, List, Optional, Union

from .api_client import OsmchaAPIClient
from .changesets import get_changeset_comments, list_user_changesets
from .models import (ChangesetDiscussion, ChangesetId, CommentEntry, RunResult, UserReport,
                     changeset_url)
from .output import ReportFormatter


def is_resolved(discussion: ChangesetDiscussion, username: str) -> bool:
    """Return True if the changeset owner wrote the last comment of the discussion.

    This is a heuristic: the owner having the final word is taken to mean any
    question raised on the changeset was answered. It says nothing about
    whether the underlying issue was actually fixed.
    """
    return discussion.last_comment.author_username == username


def summarize_discussions(username: str, discussions: List[ChangesetDiscussion]) -> UserReport:
    """Count discussed, resolved and unresolved changesets for one user.

    Args:
        username: Owner of every changeset in ``discussions``
        discussions: Discussions in changeset listing order

    Returns:
        The user's report; unresolved URLs keep the order of ``discussions``
    """
    with_comments = [d for d in discussions if d.has_comments]
    unresolved = [d for d in with_comments if not is_resolved(d, username)]

    return UserReport(
        username=username,
        total_changesets=len(discussions),
        with_comments=len(with_comments),
        without_comments=len(discussions) - len(with_comments),
        resolved_count=len(with_comments) - len(unresolved),
        unresolved_count=len(unresolved),
        unresolved_changeset_urls=[changeset_url(d.changeset_id) for d in unresolved],
    )


class ReportBuilder:
    """Fetches changesets and discussions for a batch of users and prints their reports."""

    def __init__(
        self,
        api_client: OsmchaAPIClient = None,
        token: str = None,
        formatter: ReportFormatter = None,
        max_pages: Optional[int] = None,
        max_concurrent_requests: Optional[int] = None
    ):
        """Initialize the report builder.

        Args:
            api_client: Client to use (a new one is created from ``token`` otherwise)
            token: OSMCHA API secret
            formatter: Formatter that prints each finished report block
            max_pages: Page limit for the changeset listing (None = no limit)
            max_concurrent_requests: Limit on in-flight comment requests (None = no limit)
        """
        self.api_client = api_client or OsmchaAPIClient(token)
        self.formatter = formatter or ReportFormatter()
        self.max_pages = max_pages
        self.max_concurrent_requests = max_concurrent_requests
        self._request_slots = (
            threading.BoundedSemaphore(max_concurrent_requests) if max_concurrent_requests else None
        )

    def build_reports(self, usernames: List[str], from_date: Union[date, str],
                      to_date: Union[date, str]) -> RunResult:
        """List changesets for all users, then build and print one report per user.

        Users without changesets in the window get no report. Report blocks are
        printed as each user finishes, so their order is not fixed; the returned
        reports follow the order in which users were first seen in the listing.

        Args:
            usernames: OSM usernames to report on
            from_date: First day of the window (inclusive)
            to_date: Last day of the window (inclusive)

        Returns:
            RunResult holding the reports and any per-user failures

        Raises:
            OsmchaLogsError: If the changeset listing itself fails
        """
        result = RunResult()
        if not usernames:
            logging.warning("No usernames given, nothing to report")
            return result

        changesets_by_user = list_user_changesets(
            self.api_client, ','.join(usernames), from_date, to_date, max_pages=self.max_pages
        )
        if not changesets_by_user:
            logging.info("No changesets found for the requested users")
            return result

        logging.info(f"Building reports for {len(changesets_by_user)} user(s)")
        reports_by_user: Dict[str, UserReport] = {}

        with ThreadPoolExecutor(max_workers=len(changesets_by_user)) as executor:
            future_to_user = {
                executor.submit(self._build_user_report, username, changeset_ids): username
                for username, changeset_ids in changesets_by_user.items()
            }

            for future in as_completed(future_to_user):
                username = future_to_user[future]
                try:
                    reports_by_user[username] = future.result()
                except Exception as e:
                    logging.error(f"Error building report for {username}: {e}", exc_info=True)
                    result.errors.append(f"{username}: {e}")

        result.reports = [reports_by_user[u] for u in changesets_by_user if u in reports_by_user]
        return result

    def _build_user_report(self, username: str, changeset_ids: List[ChangesetId]) -> UserReport:
        discussions = self.fetch_discussions(changeset_ids)
        report = summarize_discussions(username, discussions)
        self.formatter.print_report(report)
        return report

    def fetch_discussions(self, changeset_ids: List[ChangesetId]) -> List[ChangesetDiscussion]:
        """Fetch the comment threads of all changesets concurrently.

        Returns:
            One discussion per id, in the order of ``changeset_ids``
        """
        if not changeset_ids:
            return []

        with ThreadPoolExecutor(max_workers=len(changeset_ids)) as executor:
            futures = [executor.submit(self._fetch_comments, cid) for cid in changeset_ids]
            return [
                ChangesetDiscussion(changeset_id=cid, comments=future.result())
                for cid, future in zip(changeset_ids, futures)
            ]

    def _fetch_comments(self, changeset_id: ChangesetId) -> List[CommentEntry]:
        if self._request_slots is None:
            return get_changeset_comments(self.api_client, changeset_id)
        with self._request_slots:
            return get_changeset_comments(self.api_client, changeset_id)
