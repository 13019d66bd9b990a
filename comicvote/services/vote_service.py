"""Vote counting and toggling.

Each toggle touches at most one row. Uniqueness of (comic, visitor) is left
to the database index, so a lost race surfaces as ``InternalError``.
"""
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..errors import BadRequest, InternalError
from ..extensions import db
from ..models.vote import addVote, countVotes, countVotesByComic, deleteVote, getVote, votedComics


def parse_comic_ids(raw):
    """Split the ``comic`` query parameter ("001,002") into ids."""
    if not raw:
        return []
    return raw.split(',')


def _clean_ids(comic_ids):
    seen = []
    for comic_id in comic_ids or ():
        if not isinstance(comic_id, str):
            continue
        comic_id = comic_id.strip()
        if comic_id and comic_id not in seen:
            seen.append(comic_id)
    return seen


def get_votes(comic_ids, visitor_id):
    ids = _clean_ids(comic_ids)
    if not ids:
        raise BadRequest("Missing 'comic' query parameter")

    try:
        counts = countVotesByComic(ids)
        voted = votedComics(ids, visitor_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception('DB error while reading votes for %s', ids)
        raise InternalError(str(e)) from e

    return {
        comic_id: {'count': counts.get(comic_id, 0), 'user_voted': comic_id in voted}
        for comic_id in ids
    }


def toggle_vote(comic_id, visitor_id):
    if not comic_id or not isinstance(comic_id, str):
        raise BadRequest("Missing 'comicId' in request body")

    try:
        existing = getVote(comic_id, visitor_id)
        if existing:
            deleteVote(existing)
        else:
            addVote(comic_id, visitor_id)
        db.session.commit()
        count = countVotes(comic_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception('DB error in toggle_vote comic=%s', comic_id)
        raise InternalError(str(e)) from e

    voted = existing is None
    current_app.logger.debug('Vote toggled comic=%s voted=%s count=%s', comic_id, voted, count)
    return {'comic_id': comic_id, 'count': count, 'voted': voted}
