"""Listing changesets by user and fetching their discussion threads."""

import json
import logging
from collections import OrderedDict
from datetime import date
from typing import List, Optional, Union
from urllib.parse import urlencode

from .api_client import OsmchaAPIClient
from .errors import PaginationLimitError, ParseError
from .models import Changeset, ChangesetId, CommentEntry

PAGE_SIZE = 100


def _parse_json(body: str, url: str):
    try:
        return json.loads(body)
    except (TypeError, ValueError) as e:
        logging.error(f"Could not parse response from {url} as JSON: {e}")
        raise ParseError(f"Invalid JSON from {url}: {e}") from e


def _format_date(value: Union[date, str]) -> str:
    return value.isoformat() if isinstance(value, date) else str(value)


def build_changesets_url(base_url: str, usernames: str, from_date: Union[date, str],
                         to_date: Union[date, str], page_size: int = PAGE_SIZE) -> str:
    """Build the first-page URL of the changeset listing query."""
    params = {
        'page': 1,
        'page_size': page_size,
        'users': usernames,
        'date__gte': _format_date(from_date),
        'date__lte': _format_date(to_date),
    }
    return f"{base_url}?{urlencode(params, safe=',')}"


def list_user_changesets(api_client: OsmchaAPIClient, usernames: Union[str, List[str]],
                         from_date: Union[date, str], to_date: Union[date, str],
                         max_pages: Optional[int] = None) -> 'OrderedDict[str, List[ChangesetId]]':
    """Fetch the changeset ids of each user within a date window.

    OSMCHA paginates by handing back the full URL of the next page in the
    ``next`` field, so pages are fetched one after another until ``next``
    is null.

    Args:
        api_client: Client used to send requests
        usernames: Comma-separated usernames (or a list of them)
        from_date: First day of the window (inclusive)
        to_date: Last day of the window (inclusive)
        max_pages: Stop with an error after this many pages (None = no limit)

    Returns:
        Mapping of username to changeset ids. Users appear in first-seen
        order and ids in server response order.

    Raises:
        PaginationLimitError: If more than ``max_pages`` pages would be fetched
    """
    if not isinstance(usernames, str):
        usernames = ','.join(usernames)
    requested_users = {u for u in usernames.split(',') if u}

    changeset_ids_by_user: 'OrderedDict[str, List[ChangesetId]]' = OrderedDict()
    next_url = build_changesets_url(api_client.base_url, usernames, from_date, to_date)
    pages = 0

    while next_url is not None:
        if max_pages is not None and pages >= max_pages:
            logging.error(f"Stopped changeset listing after {pages} pages; next page was {next_url}")
            raise PaginationLimitError(f"Changeset listing exceeded {max_pages} pages")

        logging.debug(f"Fetching changeset page {pages + 1}: {next_url}")
        response = _parse_json(api_client.execute_request(api_client.build_request(next_url)), next_url)
        pages += 1

        try:
            features = response['features']
            next_url = response.get('next')
        except (KeyError, TypeError, AttributeError) as e:
            logging.error(f"Unexpected changeset listing response from {next_url}: {e}")
            raise ParseError(f"Unexpected changeset listing response: {e}") from e

        try:
            changesets = [Changeset.from_feature(feature) for feature in features]
        except (KeyError, TypeError, AttributeError) as e:
            logging.error(f"Unexpected changeset feature in listing response: {e!r}")
            raise ParseError(f"Unexpected changeset feature in listing response: {e!r}") from e

        for changeset in changesets:
            if changeset.owner_username not in requested_users:
                logging.warning(f"Ignoring changeset {changeset.id} by unrequested user '{changeset.owner_username}'")
                continue
            changeset_ids_by_user.setdefault(changeset.owner_username, []).append(changeset.id)

    total = sum(len(ids) for ids in changeset_ids_by_user.values())
    logging.info(f"Fetched {total} changesets for {len(changeset_ids_by_user)} user(s) in {pages} page(s)")
    return changeset_ids_by_user


def get_changeset_comments(api_client: OsmchaAPIClient, changeset_id: ChangesetId) -> List[CommentEntry]:
    """Fetch the discussion thread of a single changeset.

    Args:
        api_client: Client used to send requests
        changeset_id: OSM changeset id

    Returns:
        Comments in server (chronological) order; empty if there is no discussion
    """
    url = f"{api_client.base_url}{changeset_id}/comment/"
    try:
        comments = _parse_json(api_client.execute_request(api_client.build_request(url)), url)
    except Exception as e:
        logging.error(f"Error fetching comments for changeset {changeset_id}: {e}")
        raise

    if not isinstance(comments, list):
        logging.error(f"Expected a list of comments for changeset {changeset_id}, got {type(comments).__name__}")
        raise ParseError(f"Unexpected comment response for changeset {changeset_id}")

    try:
        return [CommentEntry.from_api(comment) for comment in comments]
    except (KeyError, TypeError, AttributeError) as e:
        logging.error(f"Unexpected comment entry for changeset {changeset_id}: {e!r}")
        raise ParseError(f"Unexpected comment entry for changeset {changeset_id}: {e!r}") from e
