from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException


class VoteError(Exception):
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class BadRequest(VoteError):
    """Missing or malformed input. Not retried."""
    status_code = 400
    message = 'Bad request'


class InternalError(VoteError):
    """Store failure; the caller only ever sees the generic message."""
    status_code = 500

    def __init__(self, message=None):
        super().__init__(message)
        # Details stay in the server log
        self.message = InternalError.message


def register_error_handlers(bp):
    @bp.errorhandler(VoteError)
    def handle_vote_error(error):
        return jsonify({'error': error.message}), error.status_code

    @bp.errorhandler(Exception)
    def handle_unexpected_error(error):
        if isinstance(error, HTTPException):
            return jsonify({'error': error.description}), error.code
        current_app.logger.exception('Unhandled error in %s', bp.name)
        return jsonify({'error': InternalError.message}), 500
