"""
Shared fixtures: a fake OSMCHA backend plugged into the client's session.
"""

import json
import threading
from unittest.mock import Mock

import pytest
import requests

from osmcha_logs.api_client import OsmchaAPIClient
from osmcha_logs.changesets import build_changesets_url

BASE_URL = 'https://osmcha.test/api/v1/changesets/'


class FakeOsmcha:
    """Answers requests from a URL -> payload table and records every call."""

    def __init__(self):
        self.routes = {}
        self.failures = {}
        self.calls = []
        self.on_request = None
        self._lock = threading.Lock()

    def add(self, url, payload, status_code=200):
        self.routes[url] = (payload, status_code)

    def add_comments(self, changeset_id, comments):
        self.add(comments_url(changeset_id), comments)

    def add_listing_page(self, url, features, next_url=None):
        self.add(url, {'type': 'FeatureCollection', 'features': features, 'next': next_url})

    def fail(self, url, exc):
        self.failures[url] = exc

    def __call__(self, method, url, headers=None, timeout=None):
        with self._lock:
            self.calls.append({'method': method, 'url': url, 'headers': headers})

        if self.on_request:
            self.on_request(url)

        if url in self.failures:
            raise self.failures[url]

        payload, status_code = self.routes.get(url, ({'detail': 'Not found.'}, 404))
        response = Mock()
        response.status_code = status_code
        response.text = payload if isinstance(payload, str) else json.dumps(payload)
        if status_code >= 400:
            response.raise_for_status.side_effect = requests.exceptions.HTTPError(
                f"{status_code} Client Error", response=response
            )
        return response

    @property
    def urls(self):
        return [call['url'] for call in self.calls]


def feature(changeset_id, user):
    return {'id': changeset_id, 'type': 'Feature', 'properties': {'user': user}}


def comment(user, message='...'):
    return {'userName': user, 'message': message}


def comments_url(changeset_id):
    return f"{BASE_URL}{changeset_id}/comment/"


def listing_url(users, from_date='2018-01-01', to_date='2019-10-31'):
    return build_changesets_url(BASE_URL, users, from_date, to_date)


@pytest.fixture
def fake_osmcha():
    return FakeOsmcha()


@pytest.fixture
def api_client(fake_osmcha):
    client = OsmchaAPIClient(token='secret', base_url=BASE_URL)
    client.session.request = Mock(side_effect=fake_osmcha)
    return client
