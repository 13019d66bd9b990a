from .vote_forms import VoteForm
