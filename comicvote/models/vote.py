from sqlalchemy import func

from ..extensions import db
from .base import BaseModel


class Vote(BaseModel):
    __tablename__ = 'votes'

    comic_id = db.Column(db.String(64), nullable=False)
    visitor_id = db.Column(db.String(64), nullable=False)  # visitor cookie value, not an account

    # One vote per visitor and comic; the database rejects duplicates
    __table_args__ = (
        db.Index('ix_votes_comic_visitor', 'comic_id', 'visitor_id', unique=True),
    )

    def __repr__(self):
        return f'<Vote comic={self.comic_id} visitor={self.visitor_id}>'


def getVote(comic_id, visitor_id):
    return Vote.query.filter_by(comic_id=comic_id, visitor_id=visitor_id).first()


def addVote(comic_id, visitor_id):
    vote = Vote(comic_id=comic_id, visitor_id=visitor_id)
    db.session.add(vote)
    return vote


def deleteVote(vote):
    db.session.delete(vote)


def countVotes(comic_id):
    return Vote.query.filter_by(comic_id=comic_id).count()


def countVotesByComic(comic_ids):
    """{comic_id: count} for the given comics; comics without votes are absent."""
    rows = (
        db.session.query(Vote.comic_id, func.count(Vote.id))
        .filter(Vote.comic_id.in_(comic_ids))
        .group_by(Vote.comic_id)
        .all()
    )
    return {comic_id: count for comic_id, count in rows}


def votedComics(comic_ids, visitor_id):
    rows = (
        db.session.query(Vote.comic_id)
        .filter(Vote.comic_id.in_(comic_ids), Vote.visitor_id == visitor_id)
        .all()
    )
    return {comic_id for (comic_id,) in rows}
