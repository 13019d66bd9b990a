"""Python counterpart of static/js/vote.js.

Drives the same optimistic protocol against /api/vote: render the guessed
state, post the toggle, then keep the server's answer or roll back.
"""
import logging
from contextlib import contextmanager

import requests

logger = logging.getLogger(__name__)


class VoteClientError(Exception):
    """Non-success response from the vote API."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class VoteButton:
    """State of one vote control. Disabled until its real state is loaded."""

    def __init__(self, comic_id, count=0, voted=False, disabled=True):
        self.comic_id = comic_id
        self.count = count
        self.voted = voted
        self.disabled = disabled

    def render(self, count, voted):
        self.count = count
        self.voted = voted

    def __repr__(self):
        return f'<VoteButton {self.comic_id} count={self.count} voted={self.voted} disabled={self.disabled}>'


def _raise_for_error(response):
    if response.ok:
        return
    try:
        body = response.json()
    except ValueError:
        body = None
    message = body.get('error') if isinstance(body, dict) else None
    raise VoteClientError(message or f'HTTP {response.status_code}', response.status_code)


def _json_object(response):
    _raise_for_error(response)
    data = response.json()
    if not isinstance(data, dict):
        raise VoteClientError('Unexpected response body', response.status_code)
    return data


class VoteClient:
    def __init__(self, base_url, session=None, timeout=10):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def vote_url(self):
        return f'{self.base_url}/api/vote'

    def load(self, buttons):
        """Fetch every button's state in one call and enable the ones answered."""
        comic_ids = [b.comic_id for b in buttons if b.comic_id]
        if not comic_ids:
            return False

        try:
            response = self.session.get(self.vote_url, params={'comic': ','.join(comic_ids)}, timeout=self.timeout)
            data = _json_object(response)
        except (requests.RequestException, VoteClientError, ValueError):
            logger.exception('Failed to fetch vote data')
            return False

        results = data.get('result')
        if not isinstance(results, list):
            logger.error('Unexpected vote data: %r', data)
            return False

        by_id = {b.comic_id: b for b in buttons}
        for item in results:
            if not isinstance(item, dict):
                continue
            button = by_id.get(item.get('comicId'))
            if button is None:
                continue
            button.render(item.get('votes', 0), bool(item.get('userVoted')))
            button.disabled = False
        return True

    @contextmanager
    def pending(self, button):
        """Disable ``button`` for the duration of a request, re-enabling on every exit."""
        button.disabled = True
        try:
            yield button
        finally:
            button.disabled = False

    def toggle(self, button):
        """Returns True when the server answer was applied, False on rollback."""
        if button.disabled:
            # not loaded yet, or a request is still in flight
            return False

        previous_count, previous_voted = button.count, button.voted

        new_voted = not previous_voted
        button.render(previous_count + (1 if new_voted else -1), new_voted)

        with self.pending(button):
            try:
                response = self.session.post(self.vote_url, json={'comicId': button.comic_id}, timeout=self.timeout)
                result = _json_object(response)
                button.render(result['count'], result['voted'])
            except (requests.RequestException, VoteClientError, ValueError, KeyError):
                logger.exception('Vote failed for comic %s', button.comic_id)
                button.render(previous_count, previous_voted)
                return False
        return True
