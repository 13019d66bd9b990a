"""Pseudonymous visitor identity carried in a long-lived cookie.

The id only deters casual double voting: clearing cookies or switching
browser gives a new visitor.
"""
import uuid
from collections import namedtuple

from flask import current_app

VisitorIdentity = namedtuple('VisitorIdentity', ['visitor_id', 'is_new'])


def is_valid_visitor_id(token):
    if not token or not isinstance(token, str):
        return False
    try:
        uuid.UUID(token)
    except ValueError:
        return False
    return True


def get_or_assign_visitor_id(token):
    if is_valid_visitor_id(token):
        return VisitorIdentity(token, False)
    return VisitorIdentity(str(uuid.uuid4()), True)


def remember_visitor(response, identity):
    """Persist a freshly assigned visitor id on the response."""
    if not identity.is_new:
        return response
    response.set_cookie(
        current_app.config['VISITOR_COOKIE_NAME'],
        identity.visitor_id,
        max_age=current_app.config['VISITOR_COOKIE_MAX_AGE'],
        path='/',
        secure=current_app.config['VISITOR_COOKIE_SECURE'],
        httponly=True,
        samesite='Lax',
    )
    return response
