from flask import Blueprint, current_app, jsonify, request, make_response

from ..errors import BadRequest, register_error_handlers
from ..extensions import csrf
from ..forms.vote_forms import VoteForm
from ..identity import get_or_assign_visitor_id, remember_visitor
from ..services.vote_service import get_votes, parse_comic_ids, toggle_vote

api_bp = Blueprint('api', __name__, url_prefix='/api')
register_error_handlers(api_bp)


def _current_visitor():
    return get_or_assign_visitor_id(request.cookies.get(current_app.config['VISITOR_COOKIE_NAME']))


def _visitor_response(payload, identity, status=200):
    response = make_response(jsonify(payload), status)
    return remember_visitor(response, identity)


@api_bp.route('/vote', methods=['GET'])
def list_votes():
    """Counts for ?comic=001,002 and whether the current visitor voted."""
    comic_ids = parse_comic_ids(request.args.get('comic'))
    if not comic_ids:
        raise BadRequest("Missing 'comic' query parameter")

    identity = _current_visitor()
    tallies = get_votes(comic_ids, identity.visitor_id)
    result = [
        {'comicId': comic_id, 'votes': tally['count'], 'userVoted': tally['user_voted']}
        for comic_id, tally in tallies.items()
    ]
    return _visitor_response({'result': result}, identity)


@api_bp.route('/vote', methods=['POST'])
@csrf.exempt
def toggle():
    form = VoteForm(request.get_json(silent=True))
    if not form.validate():
        raise BadRequest(form.first_error())

    identity = _current_visitor()
    outcome = toggle_vote(form.comicId.data, identity.visitor_id)
    return _visitor_response(
        {'comicId': outcome['comic_id'], 'count': outcome['count'], 'voted': outcome['voted']},
        identity,
    )
